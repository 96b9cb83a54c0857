"""Tests for ColisConfig."""

import pytest
from pydantic import ValidationError

from litestar_colis.config import ColisConfig


def test_config_defaults():
    """Config has reference and pricing defaults."""
    config = ColisConfig()
    assert config.reference_prefix == "COL-"
    assert config.reference_length == 8
    assert config.reference_max_attempts == 5
    assert config.strict_tariff is True
    assert config.snapshot_sender_on_create is True
    assert config.allow_payment_revert is True


def test_config_custom_values():
    config = ColisConfig(
        reference_prefix="PKG-",
        strict_tariff=False,
        allow_payment_revert=False,
    )
    assert config.reference_prefix == "PKG-"
    assert config.strict_tariff is False
    assert config.allow_payment_revert is False


def test_config_env_prefix(monkeypatch):
    """Config reads from COLIS_ env vars."""
    monkeypatch.setenv("COLIS_STRICT_TARIFF", "false")
    monkeypatch.setenv("COLIS_REFERENCE_MAX_ATTEMPTS", "10")
    config = ColisConfig()
    assert config.strict_tariff is False
    assert config.reference_max_attempts == 10


def test_reference_length_is_bounded():
    with pytest.raises(ValidationError):
        ColisConfig(reference_length=2)
    with pytest.raises(ValidationError):
        ColisConfig(reference_length=40)


def test_reference_attempts_must_be_positive():
    with pytest.raises(ValidationError):
        ColisConfig(reference_max_attempts=0)
