"""Parcel record handled by the lifecycle core."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from litestar_colis.enums import (
    ParcelCategory,
    ParcelStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingZone,
)

__all__ = ["ACTIVE_STATUSES", "Parcel", "format_coordinates"]

# Statuses during which the assigned courier is considered occupied.
ACTIVE_STATUSES: frozenset[ParcelStatus] = frozenset(
    {ParcelStatus.PICKED_UP, ParcelStatus.IN_TRANSIT}
)


def format_coordinates(latitude: float, longitude: float) -> str:
    """Render a GPS snapshot as ``"<lat>,<lon>"`` with 6 decimals."""
    return f"{latitude:.6f},{longitude:.6f}"


@dataclass
class Parcel:
    """A parcel tracked from creation to delivery.

    ``id`` is assigned by the store on first save. Pricing fields are
    derived and only written by the service.
    """

    reference: str
    category: ParcelCategory
    zone: ShippingZone | None = None
    id: str | None = None

    description: str | None = None
    weight_kg: float = 0.0
    dimensions: str | None = None
    declared_value: Decimal | None = None
    insured: bool = False

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

    status: ParcelStatus = ParcelStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    picked_up_at: datetime | None = None
    estimated_delivery_at: datetime | None = None
    delivered_at: datetime | None = None

    total_price: Decimal = Decimal("0.00")
    courier_share: Decimal = Decimal("0.00")
    platform_share: Decimal = Decimal("0.00")

    payment_method: PaymentMethod | None = None
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_info: dict[str, Any] | None = None

    tracking_history: str | None = None
    gps_coordinates: str | None = None
    proof_of_delivery: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES
