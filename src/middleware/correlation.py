"""Request context middleware.

Stamps every request with a correlation ID (taken from X-Correlation-ID or
generated), records which user the request ran as, and writes one access
log line per request. Both values are exposed to log records through
CorrelationIdFilter.

Usage:
    from middleware.correlation import CorrelationIdMiddleware, configure_logging

    configure_logging("INFO")
    app.add_middleware(CorrelationIdMiddleware)
"""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar, Token
from typing import Any, Callable, Optional, Union

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("access")


_correlation_id_ctx: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
_request_user_ctx: ContextVar[Optional[str]] = ContextVar("request_user", default=None)

CORRELATION_ID_HEADER = "X-Correlation-ID"

DEFAULT_LOG_FORMAT = (
    "%(asctime)s [%(correlation_id)s] [%(user_id)s] %(levelname)s "
    "%(name)s: %(message)s"
)


def get_correlation_id() -> Optional[str]:
    """Correlation ID of the request being handled, or None outside a request."""
    return _correlation_id_ctx.get()


def set_correlation_id(correlation_id: str) -> Token[Optional[str]]:
    return _correlation_id_ctx.set(correlation_id)


def get_request_user() -> Optional[str]:
    return _request_user_ctx.get()


def set_request_user(user_id: Optional[str]) -> None:
    """
    Record the authenticated user for log records.

    Called by the identity dependency once the session is validated; the
    middleware resets it when the request ends.
    """
    _request_user_ctx.set(user_id)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Correlation ID, request user and access logging for each request."""

    def __init__(
        self,
        app,
        header_name: str = CORRELATION_ID_HEADER,
        generator: Optional[Callable[[], str]] = None,
    ):
        super().__init__(app)
        self.header_name = header_name
        self.generator = generator or (lambda: uuid.uuid4().hex)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Any],
    ) -> Response:
        correlation_id = request.headers.get(self.header_name) or self.generator()
        cid_token = set_correlation_id(correlation_id)
        user_token = _request_user_ctx.set(None)
        request.state.correlation_id = correlation_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            access_logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
            )
            response.headers[self.header_name] = correlation_id
            return response
        finally:
            _request_user_ctx.reset(user_token)
            _correlation_id_ctx.reset(cid_token)


class CorrelationIdFilter(logging.Filter):
    """Adds correlation_id and user_id attributes to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        record.user_id = get_request_user() or "-"
        return True


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_format: Optional[str] = None,
) -> logging.Handler:
    """
    Install a stream handler with request context on the root logger.

    Calling it again replaces the handler it installed earlier.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if getattr(existing, "_request_context_handler", False):
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._request_context_handler = True
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(log_format or DEFAULT_LOG_FORMAT))
    handler.setLevel(level)

    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    return handler
