"""Parcel status state machine.

PENDING -> PICKED_UP -> IN_TRANSIT -> DELIVERED, with CANCELLED reachable
from every non-terminal status. PENDING may also jump straight to
IN_TRANSIT for deployments that do not record pickups separately.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from litestar_colis.enums import ParcelStatus
from litestar_colis.exceptions import (
    CourierBusyError,
    CourierNotAssignedError,
    InvalidStatusError,
    InvalidTransitionError,
)
from litestar_colis.models import Parcel, format_coordinates
from litestar_colis.protocols import GeoLookup, ParcelStore

__all__ = [
    "TERMINAL_STATUSES",
    "TRANSITIONS",
    "ParcelLifecycle",
    "parse_status",
    "utc_now",
]

logger = logging.getLogger(__name__)

TRANSITIONS: dict[ParcelStatus, frozenset[ParcelStatus]] = {
    ParcelStatus.PENDING: frozenset(
        {
            ParcelStatus.PENDING,
            ParcelStatus.PICKED_UP,
            ParcelStatus.IN_TRANSIT,
            ParcelStatus.CANCELLED,
        }
    ),
    ParcelStatus.PICKED_UP: frozenset(
        {ParcelStatus.IN_TRANSIT, ParcelStatus.CANCELLED}
    ),
    ParcelStatus.IN_TRANSIT: frozenset(
        {
            ParcelStatus.IN_TRANSIT,
            ParcelStatus.DELIVERED,
            ParcelStatus.CANCELLED,
        }
    ),
    ParcelStatus.DELIVERED: frozenset(),
    ParcelStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES: frozenset[ParcelStatus] = frozenset(
    status for status, targets in TRANSITIONS.items() if not targets
)


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


def parse_status(name: str | ParcelStatus) -> ParcelStatus:
    """Parse a status name, case-insensitively.

    Raises:
        InvalidStatusError: the name matches no status.
    """
    if isinstance(name, ParcelStatus):
        return name
    try:
        return ParcelStatus[name.strip().upper()]
    except KeyError:
        raise InvalidStatusError(name) from None


class ParcelLifecycle:
    """Apply status transitions and their side effects.

    Every transition runs its side effects, sets the new status and
    persists the parcel through the store.
    """

    def __init__(
        self,
        *,
        store: ParcelStore,
        sender_locator: GeoLookup | None = None,
        courier_locator: GeoLookup | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._sender_locator = sender_locator
        self._courier_locator = courier_locator
        self._clock = clock
        self._side_effects: dict[
            ParcelStatus, Callable[[Parcel], Awaitable[None]]
        ] = {
            ParcelStatus.PENDING: self._on_pending,
            ParcelStatus.PICKED_UP: self._on_picked_up,
            ParcelStatus.IN_TRANSIT: self._on_in_transit,
            ParcelStatus.DELIVERED: self._on_delivered,
            ParcelStatus.CANCELLED: self._on_cancelled,
        }

    @staticmethod
    def can_transition(current: ParcelStatus, target: ParcelStatus) -> bool:
        return target in TRANSITIONS[current]

    async def apply(self, parcel: Parcel, target: ParcelStatus) -> Parcel:
        """Move ``parcel`` to ``target`` and persist it.

        Raises:
            InvalidTransitionError: ``target`` is not reachable.
            CourierNotAssignedError: pickup without a courier.
            CourierBusyError: the courier already has an active parcel.
        """
        current = parcel.status
        if not self.can_transition(current, target):
            raise InvalidTransitionError(current, target)

        await self._side_effects[target](parcel)
        parcel.status = target
        saved = await self._store.save(parcel)
        logger.info(
            "Parcel %s moved from %s to %s", saved.reference, current, target
        )
        return saved

    async def ensure_courier_available(
        self, courier_id: str, parcel_id: str | None
    ) -> None:
        """Raise CourierBusyError if the courier has another active parcel."""
        active = await self._store.list_active_by_courier(courier_id)
        if any(other.id != parcel_id for other in active):
            raise CourierBusyError(courier_id)

    async def _on_pending(self, parcel: Parcel) -> None:
        if parcel.gps_coordinates is None and parcel.sender_id is not None:
            await self._snapshot(
                parcel, self._sender_locator, parcel.sender_id
            )

    async def _on_picked_up(self, parcel: Parcel) -> None:
        if parcel.courier_id is None:
            raise CourierNotAssignedError(parcel.id)
        await self.ensure_courier_available(parcel.courier_id, parcel.id)
        await self._snapshot(parcel, self._courier_locator, parcel.courier_id)
        parcel.picked_up_at = self._clock()

    async def _on_in_transit(self, parcel: Parcel) -> None:
        if parcel.courier_id is not None:
            await self._snapshot(
                parcel, self._courier_locator, parcel.courier_id
            )
        if parcel.picked_up_at is None:
            parcel.picked_up_at = self._clock()

    async def _on_delivered(self, parcel: Parcel) -> None:
        # The last known position is kept as delivery evidence.
        parcel.delivered_at = self._clock()

    async def _on_cancelled(self, parcel: Parcel) -> None:
        return None

    async def _snapshot(
        self,
        parcel: Parcel,
        locator: GeoLookup | None,
        party_id: str,
    ) -> None:
        if locator is None:
            return
        try:
            location = await locator.current_location(party_id)
        except Exception as exc:
            logger.warning(
                "Location lookup for %s failed, keeping GPS snapshot of "
                "parcel %s: %s",
                party_id,
                parcel.reference,
                exc,
            )
            return
        if location is None:
            return
        latitude, longitude = location
        parcel.gps_coordinates = format_coordinates(latitude, longitude)
