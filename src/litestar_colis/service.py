"""Parcel service: the operations exposed to the request layer."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from litestar_colis.config import ColisConfig
from litestar_colis.enums import (
    ParcelCategory,
    ParcelStatus,
    PaymentStatus,
    ShippingZone,
)
from litestar_colis.exceptions import (
    ParcelNotFoundError,
    PaymentRevertError,
    ReferenceCollisionError,
    SenderNotFoundError,
    TariffNotFoundError,
)
from litestar_colis.lifecycle import ParcelLifecycle, parse_status, utc_now
from litestar_colis.models import Parcel, format_coordinates
from litestar_colis.pricing import PriceBreakdown, compute_price
from litestar_colis.protocols import GeoLookup, ParcelStore, ReferenceFactory
from litestar_colis.reference import reference_factory_from_config
from litestar_colis.schemas import ParcelRequest, PaymentRequest

logger = logging.getLogger(__name__)

# Fields copied verbatim from the request on every update.
_ALWAYS_UPDATED = (
    "description",
    "dimensions",
    "declared_value",
    "sender_name",
    "sender_phone",
    "sender_email",
    "recipient_name",
    "recipient_phone",
    "recipient_email",
    "courier_id",
    "courier_name",
    "courier_phone",
    "tracking_history",
    "proof_of_delivery",
)

# Logistics fields frozen once a courier works the parcel.
_PENDING_ONLY = (
    "pickup_address",
    "origin_city",
    "delivery_address",
    "destination_city",
    "zone",
)


class ParcelService:
    """Create, read, update and move parcels through their lifecycle."""

    def __init__(
        self,
        *,
        store: ParcelStore,
        config: ColisConfig | None = None,
        sender_locator: GeoLookup | None = None,
        courier_locator: GeoLookup | None = None,
        reference_factory: ReferenceFactory | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._config = config or ColisConfig()
        self._sender_locator = sender_locator
        self._clock = clock
        self._reference_factory = (
            reference_factory or reference_factory_from_config(self._config)
        )
        self.lifecycle = ParcelLifecycle(
            store=store,
            sender_locator=sender_locator,
            courier_locator=courier_locator,
            clock=clock,
        )

    async def create(self, request: ParcelRequest) -> Parcel:
        parcel = Parcel(
            reference=await self._new_reference(),
            category=request.category,
            zone=request.zone,
            created_at=self._clock(),
        )
        self._apply_request(parcel, request)
        parcel.status = ParcelStatus.PENDING
        parcel.payment_status = PaymentStatus.PENDING

        if (
            self._config.snapshot_sender_on_create
            and self._sender_locator is not None
            and parcel.sender_id is not None
        ):
            try:
                location = await self._sender_locator.current_location(
                    parcel.sender_id
                )
            except KeyError as exc:
                raise SenderNotFoundError(parcel.sender_id) from exc
            except Exception as exc:
                logger.warning(
                    "Location lookup for sender %s failed, creating parcel "
                    "%s without GPS snapshot: %s",
                    parcel.sender_id,
                    parcel.reference,
                    exc,
                )
                location = None
            if location is not None:
                parcel.gps_coordinates = format_coordinates(*location)

        self._reprice(parcel)
        saved = await self._store.save(parcel)
        logger.info(
            "Created parcel %s (%s, %s, %s kg) priced %s",
            saved.reference,
            saved.category,
            saved.zone,
            saved.weight_kg,
            saved.total_price,
        )
        return saved

    async def get(self, parcel_id: str) -> Parcel:
        try:
            return await self._store.get_by_id(parcel_id)
        except KeyError as exc:
            raise ParcelNotFoundError(parcel_id) from exc

    async def get_by_reference(self, reference: str) -> Parcel:
        try:
            return await self._store.get_by_reference(reference)
        except KeyError as exc:
            raise ParcelNotFoundError(reference) from exc

    async def list_all(self) -> list[Parcel]:
        return await self._store.list_all()

    async def list_active_by_courier(self, courier_id: str) -> list[Parcel]:
        return await self._store.list_active_by_courier(courier_id)

    async def update(self, parcel_id: str, request: ParcelRequest) -> Parcel:
        """Re-apply the request fields and reprice the parcel.

        Address and zone fields are only replaced while the parcel is
        still PENDING.
        """
        parcel = await self.get(parcel_id)
        previous_courier = parcel.courier_id
        self._apply_request(parcel, request)

        if (
            parcel.is_active
            and parcel.courier_id is not None
            and parcel.courier_id != previous_courier
        ):
            await self.lifecycle.ensure_courier_available(
                parcel.courier_id, parcel.id
            )

        self._reprice(parcel)
        return await self._store.save(parcel)

    async def patch_status(self, parcel_id: str, status_name: str) -> Parcel:
        target = parse_status(status_name)
        parcel = await self.get(parcel_id)
        return await self.lifecycle.apply(parcel, target)

    async def record_payment(
        self, parcel_id: str, request: PaymentRequest
    ) -> Parcel:
        parcel = await self.get(parcel_id)

        new_status = request.payment_status
        if (
            new_status is not None
            and parcel.payment_status == PaymentStatus.PAID
            and new_status != PaymentStatus.PAID
        ):
            if not self._config.allow_payment_revert:
                raise PaymentRevertError(parcel.id, new_status)
            logger.warning(
                "Payment of parcel %s (%s) reverted from PAID to %s",
                parcel.reference,
                parcel.status,
                new_status,
            )

        if request.payment_method is not None:
            parcel.payment_method = request.payment_method
        if new_status is not None:
            parcel.payment_status = new_status
        if request.payment_info is not None:
            parcel.payment_info = request.payment_info
        return await self._store.save(parcel)

    async def delete(self, parcel_id: str) -> None:
        parcel = await self.get(parcel_id)
        await self._store.delete(parcel)
        logger.info("Deleted parcel %s", parcel.reference)

    def quote(
        self,
        category: ParcelCategory,
        zone: ShippingZone,
        weight_kg: float | None,
        insured: bool,
    ) -> PriceBreakdown:
        """Price a parcel without storing it."""
        return compute_price(category, zone, weight_kg, insured)

    async def _new_reference(self) -> str:
        attempts = self._config.reference_max_attempts
        for _ in range(attempts):
            reference = self._reference_factory()
            try:
                await self._store.get_by_reference(reference)
            except KeyError:
                return reference
            logger.warning("Parcel reference %s already taken", reference)
        raise ReferenceCollisionError(attempts)

    def _apply_request(self, parcel: Parcel, request: ParcelRequest) -> None:
        for name in _ALWAYS_UPDATED:
            setattr(parcel, name, getattr(request, name))
        parcel.insured = bool(request.insured)
        parcel.weight_kg = request.weight_kg or 0.0
        parcel.category = request.category

        if request.sender_id is not None:
            parcel.sender_id = request.sender_id
        if request.payment_method is not None:
            parcel.payment_method = request.payment_method
        if (
            request.estimated_delivery_at is not None
            and parcel.estimated_delivery_at is None
        ):
            parcel.estimated_delivery_at = request.estimated_delivery_at

        if parcel.status == ParcelStatus.PENDING:
            for name in _PENDING_ONLY:
                value = getattr(request, name)
                if value is not None:
                    setattr(parcel, name, value)

    def _reprice(self, parcel: Parcel) -> None:
        try:
            price = compute_price(
                parcel.category, parcel.zone, parcel.weight_kg, parcel.insured
            )
        except TariffNotFoundError:
            if self._config.strict_tariff:
                raise
            logger.warning(
                "No tariff for parcel %s (%s, %s, %s kg), pricing at zero",
                parcel.reference,
                parcel.category,
                parcel.zone,
                parcel.weight_kg,
            )
            price = PriceBreakdown.zero()
        parcel.total_price = price.total
        parcel.courier_share = price.courier_share
        parcel.platform_share = price.platform_share
