"""Parcel reference generation."""

from __future__ import annotations

import uuid
from functools import partial

from litestar_colis.config import ColisConfig
from litestar_colis.protocols import ReferenceFactory


def generate_reference(prefix: str = "COL-", length: int = 8) -> str:
    """Return a reference like ``COL-1A2B3C4D``.

    Eight hex characters give 2^32 possible values; callers must check
    for collisions against stored references.
    """
    return prefix + uuid.uuid4().hex[:length].upper()


def reference_factory_from_config(config: ColisConfig) -> ReferenceFactory:
    return partial(
        generate_reference,
        prefix=config.reference_prefix,
        length=config.reference_length,
    )
