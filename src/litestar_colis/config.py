"""Parcel service configuration."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ColisConfig(BaseSettings):
    """Runtime config for the parcel service.

    Reads from environment variables with COLIS_ prefix.
    """

    model_config = SettingsConfigDict(env_prefix="COLIS_")

    # Reference generation
    reference_prefix: str = "COL-"
    reference_length: int = Field(default=8, ge=4, le=32)
    reference_max_attempts: int = Field(default=5, ge=1)

    # Pricing
    strict_tariff: bool = True

    # Lifecycle and payment
    snapshot_sender_on_create: bool = True
    allow_payment_revert: bool = True
