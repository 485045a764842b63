import pytest

from request_i18n.configuration import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep settings independent from the developer's environment and .env file."""
    for name in (
        "ENVIRONMENT",
        "LOG_LEVEL",
        "I18N_DEFAULT_LANGUAGE",
        "I18N_HELPER_NAME",
        "I18N_COOKIE_NAME",
        "I18N_SESSION_NAME",
        "I18N_URL_PREFIX_NAME",
        "I18N_URL_PREFIX_ENABLED",
        "I18N_LOCALES_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
