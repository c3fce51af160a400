"""Unit tests for notifier.features."""

import pytest

from notifier.configuration import FeatureSettings
from notifier.features import CACHE_SECRETS_AND_CONFIGMAPS, FeatureGates


@pytest.mark.unit
class TestFeatureGates:
    """Tests for FeatureGates."""

    def test_defaults(self):
        gates = FeatureGates()

        assert gates.enabled(CACHE_SECRETS_AND_CONFIGMAPS) is False
        assert gates.as_dict() == {"CacheSecretsAndConfigMaps": False}

    def test_override(self):
        gates = FeatureGates({CACHE_SECRETS_AND_CONFIGMAPS: True})

        assert gates.enabled(CACHE_SECRETS_AND_CONFIGMAPS) is True

    def test_unknown_override(self):
        with pytest.raises(KeyError):
            FeatureGates({"DetailedMetrics": True})

    def test_enabled_unknown_gate(self):
        with pytest.raises(KeyError):
            FeatureGates().enabled("DetailedMetrics")

    def test_disable(self):
        gates = FeatureGates({CACHE_SECRETS_AND_CONFIGMAPS: True})

        gates.disable(CACHE_SECRETS_AND_CONFIGMAPS)

        assert gates.enabled(CACHE_SECRETS_AND_CONFIGMAPS) is False

    def test_disable_unknown_gate_ignored(self):
        gates = FeatureGates()

        gates.disable("DetailedMetrics")

        assert gates.as_dict() == {"CacheSecretsAndConfigMaps": False}

    def test_gates_are_independent(self):
        first = FeatureGates({CACHE_SECRETS_AND_CONFIGMAPS: True})
        second = FeatureGates()

        assert second.enabled(CACHE_SECRETS_AND_CONFIGMAPS) is False
        assert first.enabled(CACHE_SECRETS_AND_CONFIGMAPS) is True

    def test_from_settings(self, monkeypatch):
        monkeypatch.setenv("FEATURE_CACHE_SECRETS_AND_CONFIGMAPS", "true")

        gates = FeatureGates.from_settings(FeatureSettings())

        assert gates.enabled(CACHE_SECRETS_AND_CONFIGMAPS) is True
