"""Unit tests for notifier.configuration.settings.

Tests cover:
- Defaults of each settings group
- Environment variable overrides
- Cached settings accessor
"""

import pytest

from notifier.configuration import (
    DeliverySettings,
    DispatcherSettings,
    FeatureSettings,
    NotifierSettings,
    get_settings,
)


@pytest.mark.unit
class TestDeliverySettings:
    """Test suite for DeliverySettings."""

    def test_defaults(self):
        delivery = DeliverySettings()

        assert delivery.retry_wait_min_seconds == 2.0
        assert delivery.retry_wait_max_seconds == 30.0
        assert delivery.retry_max == 4

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("DELIVERY_RETRY_WAIT_MIN_SECONDS", "0.5")
        monkeypatch.setenv("DELIVERY_RETRY_MAX", "1")

        delivery = DeliverySettings()

        assert delivery.retry_wait_min_seconds == 0.5
        assert delivery.retry_max == 1
        # Defaults preserved
        assert delivery.retry_wait_max_seconds == 30.0


@pytest.mark.unit
class TestDispatcherSettings:
    """Test suite for DispatcherSettings."""

    def test_defaults(self):
        dispatcher = DispatcherSettings()

        assert dispatcher.max_workers == 8
        assert dispatcher.timeout_seconds == 15.0


@pytest.mark.unit
class TestFeatureSettings:
    """Test suite for FeatureSettings."""

    def test_defaults(self):
        assert FeatureSettings().cache_secrets_and_configmaps is False


@pytest.mark.unit
class TestNotifierSettings:
    """Test suite for NotifierSettings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("GITEA_DEBUG", raising=False)

        settings = NotifierSettings()

        assert settings.LOG_LEVEL == "INFO"
        assert settings.ENVIRONMENT == "development"
        assert settings.GITEA_DEBUG is False
        assert settings.is_production is False
        assert isinstance(settings.delivery, DeliverySettings)
        assert isinstance(settings.dispatcher, DispatcherSettings)
        assert isinstance(settings.features, FeatureSettings)

    def test_production(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "Production")
        monkeypatch.setenv("GITEA_DEBUG", "true")

        settings = NotifierSettings()

        assert settings.is_production is True
        assert settings.GITEA_DEBUG is True

    def test_nested_groups_read_env(self, monkeypatch):
        monkeypatch.setenv("DELIVERY_RETRY_MAX", "7")

        assert NotifierSettings().delivery.retry_max == 7

    def test_get_settings_cached(self):
        get_settings.cache_clear()

        assert get_settings() is get_settings()
