"""Router factory for litestar-colis."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from litestar import Router
from litestar.di import Provide

from litestar_colis.config import ColisConfig
from litestar_colis.exceptions import EXCEPTION_HANDLERS
from litestar_colis.lifecycle import utc_now
from litestar_colis.protocols import GeoLookup, ParcelStore, ReferenceFactory
from litestar_colis.routes.couriers import CourierController
from litestar_colis.routes.parcels import ParcelController
from litestar_colis.service import ParcelService


def create_parcel_router(
    *,
    config: ColisConfig,
    store: ParcelStore,
    sender_locator: GeoLookup | None = None,
    courier_locator: GeoLookup | None = None,
    reference_factory: ReferenceFactory | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> Router:
    """Create a configured Litestar router.

    Args:
        config: Parcel service configuration.
        store: Parcel persistence backend.
        sender_locator: Current position of senders.
        courier_locator: Current position of couriers.
        reference_factory: Generates parcel references. Built from
            ``config`` if not provided.
        clock: Source of lifecycle timestamps.

    Returns:
        A Litestar Router with all parcel endpoints.
    """
    service = ParcelService(
        store=store,
        config=config,
        sender_locator=sender_locator,
        courier_locator=courier_locator,
        reference_factory=reference_factory,
        clock=clock,
    )

    return Router(
        path="/",
        route_handlers=[
            ParcelController,
            CourierController,
        ],
        dependencies={
            "config": Provide(lambda: config, sync_to_thread=False),
            "store": Provide(lambda: store, sync_to_thread=False),
            "service": Provide(lambda: service, sync_to_thread=False),
        },
        exception_handlers=EXCEPTION_HANDLERS,
    )
