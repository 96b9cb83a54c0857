"""Litestar example app tests."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

from litestar.testing import TestClient

from litestar_colis.enums import ParcelCategory, ParcelStatus
from litestar_colis.models import Parcel


def _load_example_module():
    path = Path(__file__).resolve().parents[1] / "examples" / "app.py"
    spec = importlib.util.spec_from_file_location(
        "litestar_colis_example",
        path,
    )
    if spec is None or spec.loader is None:
        raise RuntimeError("Cannot load Litestar example app module")
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


def test_example_app_creates_and_picks_up_parcel() -> None:
    module = _load_example_module()

    with TestClient(app=module.app) as client:
        created = client.post(
            "/parcels",
            json={
                "category": "VALUABLE",
                "zone": "URBAN",
                "weight_kg": 3,
                "sender_id": "client-1",
                "courier_id": "courier-1",
            },
        )
        assert created.status_code == 201
        parcel_id = created.json()["id"]

        picked = client.patch(
            f"/parcels/{parcel_id}/status", params={"status": "PICKED_UP"}
        )

    assert picked.status_code == 200
    assert picked.json()["gps_coordinates"] == "14.692778,-17.446667"


async def test_example_store_returns_copies() -> None:
    module = _load_example_module()
    store = module.InMemoryStore()
    saved = await store.save(
        Parcel(reference="COL-DEMO0001", category=ParcelCategory.STANDARD)
    )
    saved.status = ParcelStatus.CANCELLED

    fetched = await store.get_by_id(saved.id)
    assert fetched.status == ParcelStatus.PENDING
    assert fetched is not store.items[saved.id]
