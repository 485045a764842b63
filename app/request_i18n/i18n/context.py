"""Request-like context and per-unit-of-work localization state."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

from structlog.stdlib import BoundLogger

from request_i18n.i18n.localizer import Localizer
from request_i18n.logging import get_module_logger

logger = get_module_logger()

TranslateFunc = Callable[..., str]


class RequestContext(Protocol):
    """What the translator needs from the host of a unit of work."""

    @property
    def path(self) -> str:
        """Request path (e.g., "/fr/hello")."""
        ...

    @property
    def logger(self) -> BoundLogger:
        """Log sink for diagnostics about this unit of work."""
        ...

    def cookie(self, name: str) -> Optional[str]: ...

    def session_value(self, name: str) -> Any: ...

    def header(self, name: str) -> Optional[str]: ...

    def param(self, name: str) -> Optional[str]: ...


@dataclass
class SimpleRequestContext:
    """RequestContext built from plain mappings.

    For units of work that are not HTTP requests (jobs, commands) and for
    tests. Header lookups are case-insensitive.
    """

    path: str = "/"
    cookies: Mapping[str, str] = field(default_factory=dict)
    session: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, str] = field(default_factory=dict)
    logger: BoundLogger = field(default_factory=lambda: logger)

    def cookie(self, name: str) -> Optional[str]:
        return self.cookies.get(name)

    def session_value(self, name: str) -> Any:
        return self.session.get(name)

    def header(self, name: str) -> Optional[str]:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def param(self, name: str) -> Optional[str]:
        return self.params.get(name)


@dataclass
class LocalizationState:
    """Localization state of one unit of work.

    Built once per unit of work by Translator.begin() and threaded through
    the call chain instead of being recomputed.

    Attributes:
        extracted: Languages found by the extractors, default language last.
        languages: Effective preference list (extracted, or refreshed).
        localizer: Localizer bound to ``languages``.
        helpers: Translate closures handed to views, keyed by helper name.
    """

    extracted: List[str]
    languages: List[str]
    localizer: Localizer
    helpers: Dict[str, TranslateFunc] = field(default_factory=dict)

    def translate(self, message_id: str, *args: Any) -> str:
        """Translate with the state's current localizer."""
        return self.localizer.localize(message_id, *args)
