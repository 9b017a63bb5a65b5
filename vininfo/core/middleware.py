"""
Request middleware: correlation ids and per-request access logging.
"""

import time
from typing import Callable

import structlog
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from vininfo.application.services.token_service import TokenService

logger = structlog.get_logger(__name__)

SESSION_COOKIE_NAME = "token"
QUIET_PATHS = {"/health"}


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request with status and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(method=request.method, path=path)
        # Unverified, for log correlation only
        user_hint = TokenService.decode_unverified(request.cookies.get(SESSION_COOKIE_NAME))
        if user_hint:
            structlog.contextvars.bind_contextvars(user_hint=user_hint)

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Request failed", duration_ms=_elapsed_ms(started))
            raise

        if path not in QUIET_PATHS:
            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                "Request handled",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(started),
                client_ip=request.client.host if request.client else "unknown",
            )
        return response


def setup_middleware(app):
    # Starlette runs the last added middleware first; the correlation id
    # must exist before request logging binds its context.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        update_request_header=True,
    )
