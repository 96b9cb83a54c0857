"""Litestar example app with an in-memory parcel store."""

from __future__ import annotations

import itertools
from dataclasses import replace

from litestar import Litestar

from litestar_colis.config import ColisConfig
from litestar_colis.exceptions import ConflictError
from litestar_colis.models import Parcel
from litestar_colis.plugin import create_parcel_router

# Demo positions around Dakar, keyed by sender or courier ID.
SENDER_POSITIONS: dict[str, tuple[float, float] | None] = {
    "client-1": (14.716677, -17.467686),
    "client-2": None,
}
COURIER_POSITIONS: dict[str, tuple[float, float] | None] = {
    "courier-1": (14.692778, -17.446667),
    "courier-2": (14.764504, -17.366029),
}


class StaticLocator:
    def __init__(self, positions: dict[str, tuple[float, float] | None]):
        self.positions = positions

    async def current_location(
        self, party_id: str
    ) -> tuple[float, float] | None:
        return self.positions[party_id]


class InMemoryStore:
    """ParcelStore keeping copies, so unsaved mutations never leak."""

    def __init__(self) -> None:
        self.items: dict[str, Parcel] = {}
        self._ids = itertools.count(1)

    async def get_by_id(self, parcel_id: str) -> Parcel:
        return replace(self.items[parcel_id])

    async def get_by_reference(self, reference: str) -> Parcel:
        for parcel in self.items.values():
            if parcel.reference == reference:
                return replace(parcel)
        raise KeyError(reference)

    async def list_active_by_courier(self, courier_id: str) -> list[Parcel]:
        return [
            replace(p)
            for p in self.items.values()
            if p.courier_id == courier_id and p.is_active
        ]

    async def list_all(self) -> list[Parcel]:
        return [replace(p) for p in self.items.values()]

    async def save(self, parcel: Parcel) -> Parcel:
        if parcel.is_active and parcel.courier_id is not None:
            for other in self.items.values():
                if (
                    other.id != parcel.id
                    and other.courier_id == parcel.courier_id
                    and other.is_active
                ):
                    raise ConflictError(
                        f"Courier {parcel.courier_id} is busy"
                    )
        if parcel.id is None:
            parcel = replace(parcel, id=f"p-{next(self._ids)}")
        self.items[parcel.id] = replace(parcel)
        return replace(parcel)

    async def delete(self, parcel: Parcel) -> None:
        del self.items[parcel.id]


app = Litestar(
    route_handlers=[
        create_parcel_router(
            config=ColisConfig(),
            store=InMemoryStore(),
            sender_locator=StaticLocator(SENDER_POSITIONS),
            courier_locator=StaticLocator(COURIER_POSITIONS),
        )
    ]
)
