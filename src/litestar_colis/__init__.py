# src/litestar_colis/__init__.py
"""Parcel lifecycle and pricing engine with a Litestar request layer."""

from typing import TYPE_CHECKING

__version__ = "0.1.0"

__all__ = [
    "ColisConfig",
    "ColisError",
    "GeoLookup",
    "Parcel",
    "ParcelCategory",
    "ParcelLifecycle",
    "ParcelNotFoundError",
    "ParcelRequest",
    "ParcelResponse",
    "ParcelService",
    "ParcelStatus",
    "ParcelStore",
    "PaymentRequest",
    "ShippingZone",
    "__version__",
    "compute_price",
    "create_parcel_router",
]

if TYPE_CHECKING:
    from litestar_colis.config import ColisConfig
    from litestar_colis.enums import ParcelCategory, ParcelStatus, ShippingZone
    from litestar_colis.exceptions import ColisError, ParcelNotFoundError
    from litestar_colis.lifecycle import ParcelLifecycle
    from litestar_colis.models import Parcel
    from litestar_colis.plugin import create_parcel_router
    from litestar_colis.pricing import compute_price
    from litestar_colis.protocols import GeoLookup, ParcelStore
    from litestar_colis.schemas import (
        ParcelRequest,
        ParcelResponse,
        PaymentRequest,
    )
    from litestar_colis.service import ParcelService

_LAZY_MODULES = {
    "ColisConfig": "config",
    "ColisError": "exceptions",
    "GeoLookup": "protocols",
    "Parcel": "models",
    "ParcelCategory": "enums",
    "ParcelLifecycle": "lifecycle",
    "ParcelNotFoundError": "exceptions",
    "ParcelRequest": "schemas",
    "ParcelResponse": "schemas",
    "ParcelService": "service",
    "ParcelStatus": "enums",
    "ParcelStore": "protocols",
    "PaymentRequest": "schemas",
    "ShippingZone": "enums",
    "compute_price": "pricing",
    "create_parcel_router": "plugin",
}


def __getattr__(name: str):
    # Lazy imports to avoid loading all submodules on package import.
    module_name = _LAZY_MODULES.get(name)
    if module_name is None:
        raise AttributeError(
            f"module 'litestar_colis' has no attribute {name!r}"
        )
    from importlib import import_module

    module = import_module(f"litestar_colis.{module_name}")
    return getattr(module, name)
