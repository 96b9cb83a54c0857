"""Tiered tariff computation.

Prices depend on the parcel category, the shipping zone and a weight tier
(up to 5, 10, 20 and 30 kg). Insured parcels pay a flat 5% surcharge and
the total is split 75/25 between the courier and the platform.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from litestar_colis.enums import ParcelCategory, ShippingZone
from litestar_colis.exceptions import TariffNotFoundError

__all__ = [
    "COURIER_RATE",
    "INSURANCE_MULTIPLIER",
    "TARIFFS",
    "WEIGHT_TIERS",
    "PriceBreakdown",
    "base_price",
    "compute_price",
]

WEIGHT_TIERS: tuple[int, ...] = (5, 10, 20, 30)

INSURANCE_MULTIPLIER = Decimal("1.05")
COURIER_RATE = Decimal("0.75")

_CENT = Decimal("0.01")

# One price per weight tier, in WEIGHT_TIERS order.
TARIFFS: dict[tuple[ParcelCategory, ShippingZone], tuple[int, ...]] = {
    (ParcelCategory.STANDARD, ShippingZone.URBAN): (3000, 4500, 7500, 11000),
    (ParcelCategory.STANDARD, ShippingZone.INTERURBAN): (
        7500,
        10000,
        15000,
        20000,
    ),
    (ParcelCategory.STANDARD, ShippingZone.INTERNATIONAL): (
        34650,
        66300,
        130600,
        196000,
    ),
    (ParcelCategory.VALUABLE, ShippingZone.URBAN): (4000, 6000, 9500, 14000),
    (ParcelCategory.VALUABLE, ShippingZone.INTERURBAN): (
        8000,
        12000,
        18000,
        25000,
    ),
    (ParcelCategory.VALUABLE, ShippingZone.INTERNATIONAL): (
        36382,
        69615,
        137130,
        205800,
    ),
    (ParcelCategory.BULKY, ShippingZone.URBAN): (8000, 12000, 18000, 26000),
    (ParcelCategory.BULKY, ShippingZone.INTERURBAN): (
        15000,
        20000,
        30000,
        40000,
    ),
    (ParcelCategory.BULKY, ShippingZone.INTERNATIONAL): (
        65000,
        100000,
        150000,
        250000,
    ),
}


@dataclass(frozen=True)
class PriceBreakdown:
    """Monetary breakdown of a parcel price."""

    total: Decimal
    courier_share: Decimal
    platform_share: Decimal

    @classmethod
    def zero(cls) -> PriceBreakdown:
        return cls(
            total=Decimal("0.00"),
            courier_share=Decimal("0.00"),
            platform_share=Decimal("0.00"),
        )


def _quantize(amount: Decimal) -> Decimal:
    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


def base_price(
    category: ParcelCategory,
    zone: ShippingZone | str | None,
    weight_kg: float | None,
) -> Decimal:
    """Look up the tariff cell for a parcel.

    Raises:
        TariffNotFoundError: zone unrecognized or weight outside every tier.
    """
    parsed_zone = ShippingZone.parse(zone)
    if parsed_zone is None:
        raise TariffNotFoundError(f"Unknown shipping zone {zone!r}")

    weight = 0.0 if weight_kg is None else float(weight_kg)
    if weight < 0:
        raise TariffNotFoundError(f"Negative weight {weight} kg")

    prices = TARIFFS[(ParcelCategory(category), parsed_zone)]
    for limit, price in zip(WEIGHT_TIERS, prices, strict=True):
        if weight <= limit:
            return Decimal(price)

    raise TariffNotFoundError(
        f"No {parsed_zone} tariff for {weight} kg "
        f"(maximum {WEIGHT_TIERS[-1]} kg)"
    )


def compute_price(
    category: ParcelCategory,
    zone: ShippingZone | str | None,
    weight_kg: float | None,
    insured: bool,
) -> PriceBreakdown:
    """Compute the price breakdown of a parcel.

    Rounding happens once on the total; the platform share is the
    remainder so that both shares always add up to the total.
    """
    amount = base_price(category, zone, weight_kg)
    if insured:
        amount *= INSURANCE_MULTIPLIER

    total = _quantize(amount)
    courier_share = _quantize(total * COURIER_RATE)
    return PriceBreakdown(
        total=total,
        courier_share=courier_share,
        platform_share=total - courier_share,
    )
