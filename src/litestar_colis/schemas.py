"""Request/response schemas for HTTP endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from litestar_colis.enums import (
    ParcelCategory,
    ParcelStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingZone,
)
from litestar_colis.pricing import PriceBreakdown


def _coerce_zone(value: Any) -> Any:
    # Accept legacy labels such as "Urbain"; unknown values are left for
    # the enum validator to reject.
    if isinstance(value, str):
        return ShippingZone.parse(value) or value
    return value


class ParcelRequest(BaseModel):
    """Payload for parcel creation and full update.

    Status, timestamps, prices and the GPS snapshot are not part of the
    payload: they are owned by the lifecycle and the pricing engine.
    """

    category: ParcelCategory
    zone: ShippingZone
    description: str | None = None
    weight_kg: float | None = Field(default=None, ge=0)
    dimensions: str | None = None
    declared_value: Decimal | None = Field(default=None, ge=0)
    insured: bool | None = None

    sender_id: str | None = None
    sender_name: str | None = None
    sender_phone: str | None = None
    sender_email: str | None = None
    pickup_address: str | None = None
    origin_city: str | None = None

    recipient_name: str | None = None
    recipient_phone: str | None = None
    recipient_email: str | None = None
    delivery_address: str | None = None
    destination_city: str | None = None

    courier_id: str | None = None
    courier_name: str | None = None
    courier_phone: str | None = None

    estimated_delivery_at: datetime | None = None
    payment_method: PaymentMethod | None = None
    tracking_history: str | None = None
    proof_of_delivery: str | None = None

    @field_validator("zone", mode="before")
    @classmethod
    def normalize_zone(cls, value: Any) -> Any:
        return _coerce_zone(value)


class PaymentRequest(BaseModel):
    """Payment details; absent fields leave the stored values untouched."""

    payment_method: PaymentMethod | None = None
    payment_status: PaymentStatus | None = None
    payment_info: dict[str, Any] | None = None


class QuoteRequest(BaseModel):
    """Price simulation input."""

    category: ParcelCategory
    zone: ShippingZone
    weight_kg: float | None = Field(default=None, ge=0)
    insured: bool = False

    @field_validator("zone", mode="before")
    @classmethod
    def normalize_zone(cls, value: Any) -> Any:
        return _coerce_zone(value)


class PriceQuoteResponse(BaseModel):
    total: Decimal
    courier_share: Decimal
    platform_share: Decimal

    @classmethod
    def from_breakdown(cls, breakdown: PriceBreakdown) -> PriceQuoteResponse:
        return cls(
            total=breakdown.total,
            courier_share=breakdown.courier_share,
            platform_share=breakdown.platform_share,
        )


class ParcelResponse(BaseModel):
    """Serialized parcel response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    reference: str
    category: ParcelCategory
    zone: ShippingZone | None
    status: ParcelStatus

    description: str | None = None
    weight_kg: float
    dimensions: str | None = None
    declared_value: Decimal | None = None
    insured: bool

    sender_id: str | None = None
    sender_name: str | None = None
    sender_phone: str | None = None
    sender_email: str | None = None
    pickup_address: str | None = None
    origin_city: str | None = None

    recipient_name: str | None = None
    recipient_phone: str | None = None
    recipient_email: str | None = None
    delivery_address: str | None = None
    destination_city: str | None = None

    courier_id: str | None = None
    courier_name: str | None = None
    courier_phone: str | None = None

    created_at: datetime
    picked_up_at: datetime | None = None
    estimated_delivery_at: datetime | None = None
    delivered_at: datetime | None = None

    total_price: Decimal
    courier_share: Decimal
    platform_share: Decimal

    payment_method: PaymentMethod | None = None
    payment_status: PaymentStatus
    payment_info: dict[str, Any] | None = None

    tracking_history: str | None = None
    gps_coordinates: str | None = None
    proof_of_delivery: str | None = None

    @classmethod
    def from_parcel(cls, parcel) -> ParcelResponse:
        return cls.model_validate(parcel)
