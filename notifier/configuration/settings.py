"""Notifier configuration settings - main aggregator."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from notifier.configuration.base import NotifierBaseSettings


class DeliverySettings(NotifierBaseSettings):
    """Delivery pipeline retry configuration.

    Environment Variables:
        DELIVERY_RETRY_WAIT_MIN_SECONDS: First backoff wait (default: 2s)
        DELIVERY_RETRY_WAIT_MAX_SECONDS: Backoff ceiling (default: 30s)
        DELIVERY_RETRY_MAX: Retries after the original attempt (default: 4)

    Exponential Backoff:
        Delay calculation: min(wait_min * (2 ^ attempt), wait_max)

        Example with defaults (min=2s, max=30s):
            Retry 1: 2s
            Retry 2: 4s
            Retry 3: 8s
            Retry 4: 16s
    """

    retry_wait_min_seconds: float = Field(
        default=2.0,
        alias="DELIVERY_RETRY_WAIT_MIN_SECONDS",
        description="Minimum wait between delivery attempts (seconds)",
    )
    retry_wait_max_seconds: float = Field(
        default=30.0,
        alias="DELIVERY_RETRY_WAIT_MAX_SECONDS",
        description="Maximum wait between delivery attempts (seconds)",
    )
    retry_max: int = Field(
        default=4,
        alias="DELIVERY_RETRY_MAX",
        description="Maximum retries after the original attempt",
    )


class DispatcherSettings(NotifierBaseSettings):
    """Dispatcher fan-out configuration.

    Environment Variables:
        DISPATCHER_MAX_WORKERS: Providers posted concurrently (default: 8)
        DISPATCHER_TIMEOUT_SECONDS: Deadline for each provider post (default: 15s)
    """

    max_workers: int = Field(
        default=8,
        alias="DISPATCHER_MAX_WORKERS",
        description="Maximum number of providers posted concurrently",
    )
    timeout_seconds: float = Field(
        default=15.0,
        alias="DISPATCHER_TIMEOUT_SECONDS",
        description="Deadline applied to each provider post (seconds)",
    )


class FeatureSettings(NotifierBaseSettings):
    """Feature gate defaults.

    Environment Variables:
        FEATURE_CACHE_SECRETS_AND_CONFIGMAPS: Cache Secrets and ConfigMaps (default: False)
    """

    cache_secrets_and_configmaps: bool = Field(
        default=False,
        alias="FEATURE_CACHE_SECRETS_AND_CONFIGMAPS",
    )


class NotifierSettings(BaseSettings):
    """Notifier configuration settings - main aggregator.

    Environment Variables:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        ENVIRONMENT: Deployment environment name (production enables JSON logs)
        GITEA_DEBUG: Verbose logging for the Gitea upsert providers, applied
            by notifier.providers.create_providers

    Example:
        ```python
        from notifier.configuration import get_settings

        settings = get_settings()

        if settings.is_production:
            ...
        max_retries = settings.delivery.retry_max
        ```
    """

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    GITEA_DEBUG: bool = False

    delivery: DeliverySettings = Field(default_factory=DeliverySettings)
    dispatcher: DispatcherSettings = Field(default_factory=DispatcherSettings)
    features: FeatureSettings = Field(default_factory=FeatureSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


@lru_cache
def get_settings() -> NotifierSettings:
    """Get the process-wide settings instance.

    Only the embedding application should call this; library components
    receive their configuration explicitly.
    """
    return NotifierSettings()
