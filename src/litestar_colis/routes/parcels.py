"""Parcel endpoints."""

from __future__ import annotations

import logging
from typing import Annotated, ClassVar

from litestar import Controller, delete, get, patch, post, put
from litestar.params import Dependency, Parameter

from litestar_colis.schemas import (
    ParcelRequest,
    ParcelResponse,
    PaymentRequest,
    PriceQuoteResponse,
    QuoteRequest,
)
from litestar_colis.service import ParcelService

logger = logging.getLogger(__name__)

Service = Annotated[ParcelService, Dependency(skip_validation=True)]


class ParcelController(Controller):
    """Parcel CRUD and lifecycle endpoints."""

    path = "/parcels"
    tags: ClassVar[list[str]] = ["parcels"]

    @get("/health")
    async def parcels_health(self) -> dict[str, str]:
        """Healthcheck endpoint for parcel routes."""
        return {"status": "ok"}

    @post("/")
    async def create_parcel(
        self, data: ParcelRequest, service: Service
    ) -> ParcelResponse:
        """Create a parcel in PENDING status with its computed price."""
        parcel = await service.create(data)
        return ParcelResponse.from_parcel(parcel)

    @get("/")
    async def list_parcels(self, service: Service) -> list[ParcelResponse]:
        parcels = await service.list_all()
        return [ParcelResponse.from_parcel(parcel) for parcel in parcels]

    @post("/quote", status_code=200)
    async def quote_price(
        self, data: QuoteRequest, service: Service
    ) -> PriceQuoteResponse:
        """Price a parcel without creating it."""
        breakdown = service.quote(
            data.category, data.zone, data.weight_kg, data.insured
        )
        return PriceQuoteResponse.from_breakdown(breakdown)

    @get("/reference/{reference:str}")
    async def get_parcel_by_reference(
        self, reference: str, service: Service
    ) -> ParcelResponse:
        parcel = await service.get_by_reference(reference)
        return ParcelResponse.from_parcel(parcel)

    @get("/{parcel_id:str}")
    async def get_parcel(
        self, parcel_id: str, service: Service
    ) -> ParcelResponse:
        parcel = await service.get(parcel_id)
        return ParcelResponse.from_parcel(parcel)

    @put("/{parcel_id:str}")
    async def update_parcel(
        self, parcel_id: str, data: ParcelRequest, service: Service
    ) -> ParcelResponse:
        """Replace the parcel fields and recompute its price."""
        parcel = await service.update(parcel_id, data)
        return ParcelResponse.from_parcel(parcel)

    @delete("/{parcel_id:str}")
    async def delete_parcel(self, parcel_id: str, service: Service) -> None:
        await service.delete(parcel_id)

    @patch("/{parcel_id:str}/status")
    async def patch_status(
        self,
        parcel_id: str,
        service: Service,
        status_name: Annotated[str, Parameter(query="status")],
    ) -> ParcelResponse:
        """Move the parcel to the status named in the ``status`` query."""
        logger.debug(
            "Status change requested for parcel %s: %s",
            parcel_id,
            status_name,
        )
        parcel = await service.patch_status(parcel_id, status_name)
        return ParcelResponse.from_parcel(parcel)

    @post("/{parcel_id:str}/payment")
    async def record_payment(
        self, parcel_id: str, data: PaymentRequest, service: Service
    ) -> ParcelResponse:
        """Record the payment details present in the payload."""
        parcel = await service.record_payment(parcel_id, data)
        return ParcelResponse.from_parcel(parcel)
