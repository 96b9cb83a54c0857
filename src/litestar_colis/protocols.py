"""Collaborator protocols consumed by the parcel core."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from litestar_colis.models import Parcel

__all__ = [
    "GeoLookup",
    "ParcelStore",
    "ReferenceFactory",
]


@runtime_checkable
class GeoLookup(Protocol):
    """Current position of a sender or a courier."""

    async def current_location(
        self, party_id: str
    ) -> tuple[float, float] | None:
        """Return ``(latitude, longitude)`` or ``None`` when unknown.

        Raises ``KeyError`` when the party itself does not exist.
        """
        ...


@runtime_checkable
class ParcelStore(Protocol):
    """Durable keyed storage of parcel records.

    Implementations must guarantee that a courier never holds two parcels
    in an active status, either with a storage-level uniqueness constraint
    or with transactional read-modify-write around ``save``. A violation
    is reported by raising ``ConflictError`` from ``save``.
    """

    async def get_by_id(self, parcel_id: str) -> Parcel:
        """Get a parcel by ID. Raises KeyError if not found."""
        ...

    async def get_by_reference(self, reference: str) -> Parcel:
        """Get a parcel by reference. Raises KeyError if not found."""
        ...

    async def list_active_by_courier(self, courier_id: str) -> list[Parcel]:
        """List parcels of a courier in PICKED_UP or IN_TRANSIT."""
        ...

    async def list_all(self) -> list[Parcel]:
        """List every stored parcel."""
        ...

    async def save(self, parcel: Parcel) -> Parcel:
        """Insert or update a parcel and return the stored version."""
        ...

    async def delete(self, parcel: Parcel) -> None:
        """Remove a parcel."""
        ...


@runtime_checkable
class ReferenceFactory(Protocol):
    def __call__(self) -> str: ...
