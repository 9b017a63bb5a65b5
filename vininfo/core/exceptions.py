"""
Global exception handling for the application.
Standardizes error responses into a single JSON envelope.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigError(AppError):
    """A required secret or credential is missing."""
    def __init__(self, message: str = "Server configuration error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)


class ValidationError(AppError):
    """Malformed or rejected input."""
    def __init__(self, message: str = "Neplatný požadavek", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class AuthError(AppError):
    """Missing, invalid or expired credentials.

    The message is always generic so callers cannot tell an expired token
    from a tampered one.
    """
    def __init__(self):
        super().__init__("Unauthorized", status.HTTP_401_UNAUTHORIZED)


class NotFoundError(AppError):
    """Resource absent or not owned by the caller."""
    def __init__(self, message: str = "Nenalezeno", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class ConflictError(AppError):
    """Duplicate resource."""
    def __init__(self, message: str = "Záznam již existuje", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class RateLimitedError(AppError):
    """Action repeated too soon."""
    def __init__(self, retry_after_seconds: int, message: Optional[str] = None):
        self.retry_after_seconds = retry_after_seconds
        super().__init__(
            message or f"Počkejte {retry_after_seconds} sekund před dalším odesláním.",
            status.HTTP_429_TOO_MANY_REQUESTS,
            {"retry_after_seconds": retry_after_seconds},
        )


class TransientProviderError(AppError):
    """Email or registry provider failure."""
    def __init__(self, message: str = "Externí služba je nedostupná", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY, details)


def _error_response(request: Request, status_code: int, code: str, message: str,
                    details: Optional[Dict[str, Any]] = None, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
                "path": request.url.path,
            }
        },
        headers=headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI body/query validation failures in the common envelope."""
    errors = [
        {"loc": list(err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "ValidationError",
        "Neplatný požadavek",
        {"errors": errors},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""

    if isinstance(exc, AppError):
        headers = None
        if isinstance(exc, RateLimitedError):
            headers = {"Retry-After": str(exc.retry_after_seconds)}
        if isinstance(exc, ConfigError):
            logger.error("Configuration error", error=exc.message, path=request.url.path)
        return _error_response(
            request, exc.status_code, exc.__class__.__name__, exc.message, exc.details, headers
        )

    logger.exception("Unexpected error occurred", path=request.url.path)

    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "InternalServerError",
        "An unexpected error occurred. Please try again later.",
    )
