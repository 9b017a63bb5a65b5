"""FastAPI dependencies — session cookie auth and batch endpoint secrets."""

import secrets
from typing import Optional

from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from vininfo.application.services.auth_service import get_user
from vininfo.application.services.token_service import TokenService
from vininfo.config import Settings, get_settings
from vininfo.core.exceptions import AuthError, ConfigError
from vininfo.core.middleware import SESSION_COOKIE_NAME
from vininfo.domain.models.user import User
from vininfo.infrastructure.database import get_db
from vininfo.interfaces.deps import get_token_service

security = HTTPBearer(auto_error=False)


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TOKEN_DAYS * 24 * 60 * 60,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """Resolve the caller from the session cookie, or a bearer token as fallback."""
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token and credentials is not None:
        token = credentials.credentials
    if not token:
        raise AuthError()
    return tokens.verify_session_token(token)


def get_current_user(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    return get_user(db, user_id)


def _check_bearer(credentials: Optional[HTTPAuthorizationCredentials], secret: str) -> None:
    supplied = credentials.credentials if credentials is not None else ""
    if not secrets.compare_digest(supplied.encode(), secret.encode()):
        raise AuthError()


def require_cron_secret(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    # Unset secret leaves the cron endpoint open
    if settings.CRON_SECRET:
        _check_bearer(credentials, settings.CRON_SECRET)


def require_admin_secret(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    secret = settings.ADMIN_SECRET or settings.CRON_SECRET
    if not secret:
        raise ConfigError("ADMIN_SECRET is not configured")
    _check_bearer(credentials, secret)
