"""Shared fixtures for litestar-colis tests."""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest
from litestar import Litestar
from litestar.testing import TestClient

from litestar_colis.config import ColisConfig
from litestar_colis.enums import ParcelCategory, ShippingZone
from litestar_colis.exceptions import ConflictError
from litestar_colis.models import Parcel
from litestar_colis.plugin import create_parcel_router
from litestar_colis.schemas import ParcelRequest
from litestar_colis.service import ParcelService

SENDER_POSITION = (14.716677, -17.467686)
COURIER_POSITION = (14.692778, -17.446667)


class InMemoryStore:
    """ParcelStore keeping copies, so unsaved mutations never leak."""

    def __init__(self) -> None:
        self.items: dict[str, Parcel] = {}
        self.saves = 0
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
        self.saves += 1
        return replace(parcel)

    async def delete(self, parcel: Parcel) -> None:
        del self.items[parcel.id]


class BrokenLocator:
    """GeoLookup whose backend is unreachable."""

    async def current_location(self, party_id: str):
        raise ConnectionError("geo service down")


class StaticLocator:
    """GeoLookup answering from a dict; unknown parties raise KeyError."""

    def __init__(
        self, positions: dict[str, tuple[float, float] | None]
    ) -> None:
        self.positions = positions
        self.calls: list[str] = []

    async def current_location(
        self, party_id: str
    ) -> tuple[float, float] | None:
        self.calls.append(party_id)
        return self.positions[party_id]


class FrozenClock:
    def __init__(self) -> None:
        self.now = datetime(2026, 3, 1, 8, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: int) -> None:
        self.now += timedelta(minutes=minutes)


def make_request(**overrides) -> ParcelRequest:
    payload = {
        "category": ParcelCategory.STANDARD,
        "zone": ShippingZone.URBAN,
        "weight_kg": 7,
        "insured": False,
        "sender_id": "client-1",
        "sender_name": "Awa Diop",
        "pickup_address": "12 rue Carnot",
        "origin_city": "Dakar",
        "recipient_name": "Moussa Ba",
        "delivery_address": "5 avenue Bourguiba",
        "destination_city": "Dakar",
    }
    payload.update(overrides)
    return ParcelRequest(**payload)


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def sender_locator() -> StaticLocator:
    return StaticLocator({"client-1": SENDER_POSITION, "client-2": None})


@pytest.fixture()
def courier_locator() -> StaticLocator:
    return StaticLocator(
        {
            "courier-1": COURIER_POSITION,
            "courier-2": (14.764504, -17.366029),
            "courier-3": None,
        }
    )


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def config() -> ColisConfig:
    return ColisConfig()


@pytest.fixture()
def service(
    store: InMemoryStore,
    config: ColisConfig,
    sender_locator: StaticLocator,
    courier_locator: StaticLocator,
    clock: FrozenClock,
) -> ParcelService:
    return ParcelService(
        store=store,
        config=config,
        sender_locator=sender_locator,
        courier_locator=courier_locator,
        clock=clock,
    )


@pytest.fixture()
def test_app(
    store: InMemoryStore,
    config: ColisConfig,
    sender_locator: StaticLocator,
    courier_locator: StaticLocator,
    clock: FrozenClock,
) -> Litestar:
    router = create_parcel_router(
        config=config,
        store=store,
        sender_locator=sender_locator,
        courier_locator=courier_locator,
        clock=clock,
    )
    return Litestar(route_handlers=[router])


@pytest.fixture()
def client(test_app: Litestar) -> Iterator[TestClient]:
    with TestClient(app=test_app) as tc:
        yield tc


# ---------------------------------------------------------------------------
# SQLAlchemy fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
async def session_factory():
    from sqlalchemy.ext.asyncio import (
        AsyncSession,
        async_sessionmaker,
        create_async_engine,
    )

    from litestar_colis.contrib.sqlalchemy.models import Base

    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession)
    await engine.dispose()
