"""Fixtures for server module unit tests."""

import pytest
from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware
from starlette.requests import Request as StarletteRequest

from request_i18n.i18n import Translator
from request_i18n.server import I18nMiddleware
from tests.factories.i18n import make_locale_tree


@pytest.fixture
def server_translator():
    """Translator over the default in-memory catalog files."""
    return Translator(make_locale_tree(), "en-US")


@pytest.fixture
def i18n_app(server_translator):
    """FastAPI app with sessions and the i18n middleware installed."""
    app = FastAPI()

    @app.get("/hello")
    def hello(request: Request):
        return {"message": request.state.t("hello"), "languages": request.state.i18n.languages}

    @app.get("/items/{count}")
    def items(request: Request, count: int):
        return {"message": request.state.t("items", count)}

    @app.post("/language/{lang}")
    def set_language(request: Request, lang: str):
        request.session["lang"] = lang
        return {"language": lang}

    app.add_middleware(I18nMiddleware, translator=server_translator)
    # outermost, so the session is available to the i18n middleware
    app.add_middleware(SessionMiddleware, secret_key="test-secret")
    return app


@pytest.fixture
def make_starlette_request():
    """Factory building a Starlette request from headers and path params."""

    def _make(path="/", headers=None, path_params=None, session=None, method="GET"):
        scope = {
            "type": "http",
            "method": method,
            "scheme": "http",
            "server": ("testserver", 80),
            "root_path": "",
            "path": path,
            "query_string": b"",
            "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
            "path_params": path_params or {},
        }
        if session is not None:
            scope["session"] = session
        return StarletteRequest(scope)

    return _make
