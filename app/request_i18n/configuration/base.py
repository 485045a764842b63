"""Shared base classes for settings modules."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class I18nBaseSettings(BaseSettings):
    """Base class for localization settings.

    All settings classes should inherit from this class to ensure
    consistent configuration behavior (env file loading, case sensitivity).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
