"""SQLAlchemy 2.0 async models for parcel storage."""

import uuid
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Float,
    Index,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from litestar_colis.enums import (
    ParcelCategory,
    ParcelStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingZone,
)

# Enforces one active parcel per courier at storage level.
_ACTIVE_COURIER_CLAUSE = text("status IN ('PICKED_UP', 'IN_TRANSIT')")


def _enum(enum_cls: type) -> Enum:
    return Enum(enum_cls, native_enum=False, length=32)


def _money() -> Numeric:
    return Numeric(14, 2, asdecimal=True)


class Base(DeclarativeBase):
    """Base class for all colis models."""


class ParcelModel(Base):
    """Parcel row; columns mirror :class:`litestar_colis.models.Parcel`."""

    __tablename__ = "colis_parcels"
    __table_args__ = (
        Index(
            "uq_colis_parcels_active_courier",
            "courier_id",
            unique=True,
            sqlite_where=_ACTIVE_COURIER_CLAUSE,
            postgresql_where=_ACTIVE_COURIER_CLAUSE,
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    reference: Mapped[str] = mapped_column(String(64), unique=True)
    category: Mapped[ParcelCategory] = mapped_column(_enum(ParcelCategory))
    zone: Mapped[ShippingZone | None] = mapped_column(
        _enum(ShippingZone), nullable=True
    )

    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    weight_kg: Mapped[float] = mapped_column(Float, default=0.0)
    dimensions: Mapped[str | None] = mapped_column(String(128), nullable=True)
    declared_value: Mapped[Decimal | None] = mapped_column(
        _money(), nullable=True
    )
    insured: Mapped[bool] = mapped_column(Boolean, default=False)

    sender_id: Mapped[str | None] = mapped_column(
        String(64), index=True, nullable=True
    )
    sender_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sender_phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    sender_email: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    pickup_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    origin_city: Mapped[str | None] = mapped_column(String(128), nullable=True)

    recipient_name: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    recipient_phone: Mapped[str | None] = mapped_column(
        String(64), nullable=True
    )
    recipient_email: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    delivery_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    destination_city: Mapped[str | None] = mapped_column(
        String(128), nullable=True
    )

    courier_id: Mapped[str | None] = mapped_column(
        String(64), index=True, nullable=True
    )
    courier_name: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    courier_phone: Mapped[str | None] = mapped_column(
        String(64), nullable=True
    )

    status: Mapped[ParcelStatus] = mapped_column(
        _enum(ParcelStatus), default=ParcelStatus.PENDING
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(tz=UTC),
    )
    picked_up_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    estimated_delivery_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    delivered_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(tz=UTC),
        onupdate=lambda: datetime.now(tz=UTC),
    )

    total_price: Mapped[Decimal] = mapped_column(
        _money(), default=Decimal("0.00")
    )
    courier_share: Mapped[Decimal] = mapped_column(
        _money(), default=Decimal("0.00")
    )
    platform_share: Mapped[Decimal] = mapped_column(
        _money(), default=Decimal("0.00")
    )

    payment_method: Mapped[PaymentMethod | None] = mapped_column(
        _enum(PaymentMethod), nullable=True
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        _enum(PaymentStatus), default=PaymentStatus.PENDING
    )
    payment_info: Mapped[dict[str, Any] | None] = mapped_column(
        JSON, nullable=True
    )

    tracking_history: Mapped[str | None] = mapped_column(Text, nullable=True)
    gps_coordinates: Mapped[str | None] = mapped_column(
        String(64), nullable=True
    )
    proof_of_delivery: Mapped[str | None] = mapped_column(
        String(512), nullable=True
    )
