"""Notifier configuration module - public API.

Exports:
    get_settings: Cached NotifierSettings instance for the embedding application
    NotifierSettings: Main settings class (for testing/overrides)
    ProviderConfig: Per-provider configuration record
    TLSConfig: Transport trust/identity overrides
"""

from notifier.configuration.providers import ProviderConfig, TLSConfig
from notifier.configuration.settings import (
    DeliverySettings,
    DispatcherSettings,
    FeatureSettings,
    NotifierSettings,
    get_settings,
)

__all__ = [
    "DeliverySettings",
    "DispatcherSettings",
    "FeatureSettings",
    "NotifierSettings",
    "ProviderConfig",
    "TLSConfig",
    "get_settings",
]
