"""Auth service — registration, login and email verification."""

import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import structlog
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vininfo.application.services.email_templates import render_verification_email
from vininfo.application.services.token_service import TokenService
from vininfo.core.clock import as_utc, utcnow
from vininfo.core.exceptions import (
    AppError,
    AuthError,
    ConflictError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)
from vininfo.domain.models.user import User
from vininfo.domain.schemas.auth import RegisterRequest
from vininfo.infrastructure.email_client import EmailClient
from vininfo.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

logger = structlog.get_logger(__name__)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

PASSWORD_MIN_LENGTH = 8


@dataclass
class Registration:
    user: User
    session_token: str
    verification_code: str


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user(db: Session, user_id: str) -> User:
    user = SQLAlchemyUserRepository(db, User).get_by_id(user_id)
    if user is None:
        raise NotFoundError("Uživatel nenalezen")
    return user


def _issue_verification_code(user: User, tokens: TokenService, now: datetime) -> str:
    code = tokens.generate_verification_code()
    user.email_verification_code = code
    user.email_verification_sent_at = now
    user.email_verification_expires_at = tokens.verification_expiry(now)
    return code


async def _send_verification_email(email_client: EmailClient, to: str, code: str, ttl_hours: int) -> bool:
    """Deliver the code. A delivery failure must not undo the account change."""
    subject, html = render_verification_email(code, ttl_hours)
    try:
        await email_client.send(to, subject, html)
        return True
    except AppError as e:
        logger.warning("Verification email not sent", reason=e.message, details=e.details)
        return False


async def register_user(
    db: Session,
    body: RegisterRequest,
    tokens: TokenService,
    email_client: EmailClient,
    now: Optional[datetime] = None,
) -> Registration:
    now = now or utcnow()
    email = normalize_email(body.email)

    if not email or not body.password:
        raise ValidationError("Email a heslo jsou povinné")
    if "@" not in email:
        raise ValidationError("Neplatný email")
    if len(body.password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Heslo musí mít alespoň {PASSWORD_MIN_LENGTH} znaků")
    if not body.terms_accepted:
        raise ValidationError("Musíte souhlasit s obchodními podmínkami")

    repo = SQLAlchemyUserRepository(db, User)
    if repo.get_by_email(email):
        raise ConflictError("Uživatel s tímto emailem již existuje")

    user = User(
        email=email,
        password_hash=hash_password(body.password),
        terms_accepted_at=now,
        marketing_enabled=body.marketing_enabled,
        notifications_enabled=True,
    )
    code = _issue_verification_code(user, tokens, now)
    db.add(user)
    try:
        db.flush()
        session_token = tokens.issue_session_token(user.id)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Uživatel s tímto emailem již existuje")
    except AppError:
        db.rollback()
        raise
    db.refresh(user)

    logger.info("User registered", user_id=user.id)

    await _send_verification_email(email_client, email, code, tokens.settings.VERIFICATION_CODE_TTL_HOURS)
    return Registration(user=user, session_token=session_token, verification_code=code)


def authenticate_user(db: Session, email: str, password: str) -> User:
    user = SQLAlchemyUserRepository(db, User).get_by_email(normalize_email(email))
    if not user or not verify_password(password, user.password_hash):
        raise AuthError()
    return user


def verify_email(db: Session, user_id: str, code: str, now: Optional[datetime] = None) -> User:
    now = now or utcnow()
    user = get_user(db, user_id)

    if user.email_verified_at is not None:
        raise ValidationError("Email je již ověřen")

    expected = user.email_verification_code
    if not expected or not secrets.compare_digest(expected.encode(), code.strip().encode()):
        raise ValidationError("Neplatný ověřovací kód")

    expires_at = as_utc(user.email_verification_expires_at)
    if expires_at is None or expires_at < now:
        raise ValidationError("Platnost ověřovacího kódu vypršela")

    user.email_verified_at = now
    user.email_verification_code = None
    user.email_verification_expires_at = None
    user.email_verification_sent_at = None
    db.commit()
    db.refresh(user)
    logger.info("Email verified", user_id=user.id)
    return user


async def resend_verification(
    db: Session,
    user_id: str,
    tokens: TokenService,
    email_client: EmailClient,
    now: Optional[datetime] = None,
) -> str:
    now = now or utcnow()
    user = get_user(db, user_id)

    if user.email_verified_at is not None:
        raise ValidationError("Email je již ověřen")

    retry_after = tokens.resend_retry_after(
        user.email_verification_sent_at, user.email_verification_expires_at, now=now
    )
    if retry_after > 0:
        raise RateLimitedError(retry_after)

    code = _issue_verification_code(user, tokens, now)
    db.commit()
    logger.info("Verification code reissued", user_id=user.id)

    await _send_verification_email(email_client, user.email, code, tokens.settings.VERIFICATION_CODE_TTL_HOURS)
    return code
