"""Localization engine configuration settings."""

from typing import Any, Dict

from pydantic import Field, field_validator

from request_i18n.configuration.base import I18nBaseSettings

DEVELOPMENT = "development"


class I18nSettings(I18nBaseSettings):
    """Translator configuration.

    Environment Variables:
        I18N_DEFAULT_LANGUAGE: Language appended to every preference list (default: en-US)
        I18N_HELPER_NAME: Name of the translate closure handed to views (default: t)
        I18N_COOKIE_NAME: Cookie read by the cookie extractor (default: lang)
        I18N_SESSION_NAME: Session key read by the session extractor (default: lang)
        I18N_URL_PREFIX_NAME: Path parameter read by the URL prefix extractor (default: lang)
        I18N_URL_PREFIX_ENABLED: Append the URL prefix extractor to the chain
        I18N_LOCALES_DIR: Directory holding the catalog files (default: locales)

    Example:
        ```python
        from request_i18n.configuration import get_settings

        settings = get_settings()
        default_language = settings.i18n.DEFAULT_LANGUAGE
        ```
    """

    DEFAULT_LANGUAGE: str = Field(default="en-US", alias="I18N_DEFAULT_LANGUAGE")
    HELPER_NAME: str = Field(default="t", alias="I18N_HELPER_NAME")
    COOKIE_NAME: str = Field(default="lang", alias="I18N_COOKIE_NAME")
    SESSION_NAME: str = Field(default="lang", alias="I18N_SESSION_NAME")
    URL_PREFIX_NAME: str = Field(default="lang", alias="I18N_URL_PREFIX_NAME")
    URL_PREFIX_ENABLED: bool = Field(default=False, alias="I18N_URL_PREFIX_ENABLED")
    LOCALES_DIR: str = Field(default="locales", alias="I18N_LOCALES_DIR")

    @field_validator("DEFAULT_LANGUAGE", "HELPER_NAME", mode="before")
    @classmethod
    def validate_not_blank(cls, v: Any) -> Any:
        """Reject blank values for settings the translator cannot run without."""
        if isinstance(v, str) and not v.strip():
            raise ValueError("value must not be blank")
        return v

    @property
    def extractor_options(self) -> Dict[str, Any]:
        """Options bag handed to every language extractor."""
        return {
            "CookieName": self.COOKIE_NAME,
            "SessionName": self.SESSION_NAME,
            "URLPrefixName": self.URL_PREFIX_NAME,
        }


class Settings(I18nBaseSettings):
    """Application settings - main aggregator.

    Environment Variables:
        ENVIRONMENT: Runtime mode; catalogs hot reload only in "development"
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
    """

    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    i18n: I18nSettings

    @property
    def is_development(self) -> bool:
        """Check if the application is running in development mode."""
        return self.ENVIRONMENT == DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production."""
        return not self.is_development

    def __init__(self, **kwargs):
        if "i18n" not in kwargs:
            kwargs["i18n"] = I18nSettings()
        super().__init__(**kwargs)
