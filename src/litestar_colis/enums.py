"""Enumerations shared by the parcel core and the HTTP layer.

Every value equals its member name so enums round-trip by name in JSON.
"""

from __future__ import annotations

from enum import StrEnum


class ParcelStatus(StrEnum):
    PENDING = "PENDING"
    PICKED_UP = "PICKED_UP"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class ParcelCategory(StrEnum):
    STANDARD = "STANDARD"
    VALUABLE = "VALUABLE"
    BULKY = "BULKY"


class ShippingZone(StrEnum):
    URBAN = "URBAN"
    INTERURBAN = "INTERURBAN"
    INTERNATIONAL = "INTERNATIONAL"

    @classmethod
    def parse(cls, value: str | ShippingZone | None) -> ShippingZone | None:
        """Parse a zone name or legacy label, ``None`` when unrecognized.

        Older clients sent the zone as a French label in the destination
        city field (``Urbain``, ``Interurbain``, ``International``).
        """
        if value is None:
            return None
        if isinstance(value, ShippingZone):
            return value
        key = value.strip().upper()
        return _ZONE_ALIASES.get(key)


_ZONE_ALIASES: dict[str, ShippingZone] = {
    "URBAN": ShippingZone.URBAN,
    "URBAIN": ShippingZone.URBAN,
    "INTERURBAN": ShippingZone.INTERURBAN,
    "INTERURBAIN": ShippingZone.INTERURBAN,
    "INTERNATIONAL": ShippingZone.INTERNATIONAL,
}


class PaymentMethod(StrEnum):
    CASH = "CASH"
    CARD = "CARD"
    MOBILE_MONEY = "MOBILE_MONEY"
    BANK_TRANSFER = "BANK_TRANSFER"


class PaymentStatus(StrEnum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
