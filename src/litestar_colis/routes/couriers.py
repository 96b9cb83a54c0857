"""Courier-centric read endpoints."""

from __future__ import annotations

from typing import Annotated

from litestar import Controller, get
from litestar.params import Dependency

from litestar_colis.schemas import ParcelResponse
from litestar_colis.service import ParcelService


class CourierController(Controller):
    """Parcels seen from a courier's point of view."""

    path = "/couriers"
    tags = ["couriers"]

    @get("/{courier_id:str}/parcels/active")
    async def list_active_parcels(
        self,
        courier_id: str,
        service: Annotated[ParcelService, Dependency(skip_validation=True)],
    ) -> list[ParcelResponse]:
        """Parcels the courier currently holds (at most one)."""
        parcels = await service.list_active_by_courier(courier_id)
        return [ParcelResponse.from_parcel(parcel) for parcel in parcels]
