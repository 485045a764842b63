"""Configuration module - public API.

Exports:
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Translator settings class
    get_settings: Cached settings provider

Example:
    ```python
    from request_i18n.configuration import get_settings

    settings = get_settings()
    if settings.is_development:
        # Catalogs reload when files change...
    ```
"""

from functools import lru_cache

from request_i18n.configuration.settings import DEVELOPMENT, I18nSettings, Settings


@lru_cache
def get_settings() -> Settings:
    """Get process-wide settings loaded from the environment.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()


__all__ = ["DEVELOPMENT", "I18nSettings", "Settings", "get_settings"]
