"""Language negotiation for a unit of work.

A LanguageNegotiator runs an ordered chain of extractors against a request
context and concatenates what they find, then appends the default language.
Default chain, highest precedence first:

1. Cookie - "lang"
2. Session - "lang"
3. Header - "Accept-Language"
4. Default language

url_prefix_language_extractor is available for opt-in.
"""

import threading
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Tuple

import structlog

from request_i18n.i18n.context import RequestContext
from request_i18n.i18n.errors import ExtractorConfigError

logger = structlog.get_logger().bind(component="i18n.resolver")

ExtractorOptions = Dict[str, Any]
LanguageExtractor = Callable[[ExtractorOptions, RequestContext], List[str]]

DEFAULT_EXTRACTOR_OPTIONS: ExtractorOptions = {
    "CookieName": "lang",
    "SessionName": "lang",
    "URLPrefixName": "lang",
}


def _require_option(options: ExtractorOptions, key: str) -> str:
    value = options.get(key)
    if not isinstance(value, str) or not value:
        raise ExtractorConfigError(key)
    return value


def cookie_language_extractor(options: ExtractorOptions, ctx: RequestContext) -> List[str]:
    """Language from the cookie named by the "CookieName" option."""
    value = ctx.cookie(_require_option(options, "CookieName"))
    return [value] if value else []


def session_language_extractor(options: ExtractorOptions, ctx: RequestContext) -> List[str]:
    """Language from the session key named by the "SessionName" option."""
    value = ctx.session_value(_require_option(options, "SessionName"))
    if not value:
        return []
    if not isinstance(value, str):
        ctx.logger.warning("invalid_session_language", value_type=type(value).__name__)
        return []
    return [value]


def header_language_extractor(options: ExtractorOptions, ctx: RequestContext) -> List[str]:
    """Languages from the Accept-Language header, in header order."""
    accept_language = ctx.header("Accept-Language")
    if not accept_language:
        return []
    return parse_accept_language(accept_language)


def url_prefix_language_extractor(options: ExtractorOptions, ctx: RequestContext) -> List[str]:
    """Language from the path parameter named by the "URLPrefixName" option.

    The parameter only counts when the request path really starts with it,
    so a parameter taken from elsewhere in the path cannot spoof a language.
    """
    value = ctx.param(_require_option(options, "URLPrefixName"))
    if not value:
        return []
    prefix = f"/{value}"
    path = ctx.path or ""
    if path == prefix or path.startswith(f"{prefix}/"):
        return [value]
    return []


DEFAULT_EXTRACTORS: Tuple[LanguageExtractor, ...] = (
    cookie_language_extractor,
    session_language_extractor,
    header_language_extractor,
)


def parse_accept_language_weighted(accept_language: str) -> List[Tuple[str, float]]:
    """Parse an Accept-Language header into (tag, quality) pairs.

    "fr-FR,en;q=0.8" -> [("fr-FR", 1.0), ("en", 0.8)]. Pairs keep header
    order; an unparsable quality counts as 1.0.
    """
    preferences = []
    for part in accept_language.split(","):
        lang_range, _, params = part.strip().partition(";")
        lang_range = lang_range.strip()
        if not lang_range:
            continue

        quality = 1.0
        for param in params.split(";"):
            name, _, value = param.strip().partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 1.0
        preferences.append((lang_range, quality))
    return preferences


def parse_accept_language(accept_language: str) -> List[str]:
    """Parse an Accept-Language header into language tags.

    Quality values are dropped, not used for ordering: the tags come back
    in header order. "fr-FR,en;q=0.8, de" -> ["fr-FR", "en", "de"].
    """
    return [lang_range for lang_range, _ in parse_accept_language_weighted(accept_language)]


class LanguageNegotiator:
    """Builds the language preference list of a unit of work.

    Attributes:
        extractors: Ordered extractor chain; may be edited in place.
        options: Options bag handed to every extractor.
        default_language: Appended to every preference list.
    """

    def __init__(
        self,
        default_language: str,
        extractors: Optional[Sequence[LanguageExtractor]] = None,
        options: Optional[ExtractorOptions] = None,
    ):
        self.default_language = default_language
        self.extractors: List[LanguageExtractor] = list(
            DEFAULT_EXTRACTORS if extractors is None else extractors
        )
        self.options: ExtractorOptions = dict(
            DEFAULT_EXTRACTOR_OPTIONS if options is None else options
        )
        self._reported: Set[Tuple[str, str]] = set()
        self._reported_lock = threading.Lock()

    def extract(
        self,
        ctx: RequestContext,
        options: Optional[ExtractorOptions] = None,
    ) -> List[str]:
        """Run every extractor and append the default language.

        An extractor missing a required option contributes nothing; the
        chain carries on. The list is never empty.
        """
        options = self.options if options is None else options
        languages: List[str] = []
        for extractor in self.extractors:
            try:
                languages.extend(extractor(options, ctx))
            except ExtractorConfigError as e:
                self._report(extractor, e, ctx)
        # Add default language, even if no language extractor is defined
        languages.append(self.default_language)
        return languages

    def _report(self, extractor: LanguageExtractor, error: ExtractorConfigError, ctx: RequestContext) -> None:
        key = (getattr(extractor, "__name__", repr(extractor)), error.option)
        with self._reported_lock:
            first = key not in self._reported
            self._reported.add(key)
        if first:
            ctx.logger.error("extractor_option_missing", extractor=key[0], option=error.option, error=str(error))
        else:
            logger.debug("extractor_option_missing", extractor=key[0], option=error.option)
