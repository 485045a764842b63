"""RequestContext adapter for Starlette and FastAPI requests."""

from typing import Any, Optional

from starlette.requests import Request
from structlog.stdlib import BoundLogger

from request_i18n.logging import get_module_logger

logger = get_module_logger()


class StarletteRequestContext:
    """Exposes a Starlette request as a RequestContext."""

    def __init__(self, request: Request):
        self.request = request

    @property
    def path(self) -> str:
        return self.request.url.path

    @property
    def logger(self) -> BoundLogger:
        return logger.bind(request_path=self.path, request_method=self.request.method)

    def cookie(self, name: str) -> Optional[str]:
        return self.request.cookies.get(name)

    def session_value(self, name: str) -> Any:
        # request.session asserts when SessionMiddleware is not installed
        if "session" not in self.request.scope:
            return None
        return self.request.session.get(name)

    def header(self, name: str) -> Optional[str]:
        return self.request.headers.get(name)

    def param(self, name: str) -> Optional[str]:
        return self.request.path_params.get(name)
