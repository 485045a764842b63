"""HTTP integration for Starlette and FastAPI applications."""

from request_i18n.server.context import StarletteRequestContext
from request_i18n.server.middleware import (
    CORRELATION_HEADER,
    STATE_KEY,
    I18nMiddleware,
    localization_dependency,
)

__all__ = [
    "CORRELATION_HEADER",
    "STATE_KEY",
    "I18nMiddleware",
    "StarletteRequestContext",
    "localization_dependency",
]
