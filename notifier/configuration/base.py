"""Shared base classes for settings modules."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class NotifierBaseSettings(BaseSettings):
    """Base class for all notifier settings groups.

    All settings groups inherit from this class to ensure consistent
    configuration behavior (env file loading, case sensitivity).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
