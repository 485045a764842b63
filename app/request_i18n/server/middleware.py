"""Starlette middleware and FastAPI dependency wiring a Translator in.

By default languages are looked up in this order:

Cookie - "lang"
Session - "lang"
Header - "Accept-Language"
Default - "en-US"

In development mode the catalog files are reloaded when they change.
"""

from typing import Callable, Optional

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from request_i18n.i18n.context import LocalizationState
from request_i18n.i18n.translator import Translator
from request_i18n.logging import bind_request_context
from request_i18n.server.context import StarletteRequestContext

# request.state attribute holding the LocalizationState
STATE_KEY = "i18n"

# Incoming header reused as the log correlation id
CORRELATION_HEADER = "X-Request-ID"


def _attach(request: Request, translator: Translator, state: LocalizationState) -> None:
    setattr(request.state, STATE_KEY, state)
    setattr(request.state, translator.helper_name, state.helpers[translator.helper_name])


def _begin(
    request: Request,
    translator: Translator,
    environment: Optional[str],
) -> LocalizationState:
    existing = getattr(request.state, STATE_KEY, None)
    return translator.begin(StarletteRequestContext(request), existing, environment=environment)


class I18nMiddleware(BaseHTTPMiddleware):
    """Sets up localization for every request.

    After this middleware ran, ``request.state.i18n`` holds the request's
    LocalizationState and ``request.state.<helper_name>`` its translate
    closure. Logs emitted while the request is handled carry its
    correlation id, path, method and negotiated languages.
    """

    def __init__(self, app, translator: Translator, environment: Optional[str] = None):
        super().__init__(app)
        self.translator = translator
        self.environment = environment

    async def dispatch(self, request, call_next):
        # Reloads read files, keep them off the event loop
        state = await run_in_threadpool(_begin, request, self.translator, self.environment)
        _attach(request, self.translator, state)
        with bind_request_context(
            correlation_id=request.headers.get(CORRELATION_HEADER),
            request_path=request.url.path,
            request_method=request.method,
            languages=",".join(state.languages),
        ):
            response = await call_next(request)
        return response


def localization_dependency(
    translator: Translator,
    environment: Optional[str] = None,
) -> Callable[[Request], LocalizationState]:
    """Build a FastAPI dependency returning the request's LocalizationState.

    Reuses the state set by I18nMiddleware when present. Without the
    middleware, languages are negotiated after routing, so the URL prefix
    extractor sees the route's path parameters.

    Usage:
        get_i18n = localization_dependency(translator)

        @app.get("/{lang}/hello")
        def hello(i18n: Annotated[LocalizationState, Depends(get_i18n)]):
            return {"message": i18n.translate("hello")}
    """

    def dependency(request: Request) -> LocalizationState:
        existing = getattr(request.state, STATE_KEY, None)
        if existing is not None:
            return existing
        state = _begin(request, translator, environment)
        _attach(request, translator, state)
        return state

    return dependency
