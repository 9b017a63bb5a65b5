"""Token service — signed session/unsubscribe tokens and email verification codes.

Tokens are stateless HS256 JWTs. Expiry lives inside the token; there is no
server-side revocation list, so rotating JWT_SECRET is the only way to
invalidate issued tokens early.
"""

import math
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from jose import JWTError, jwt

from vininfo.config import Settings, get_settings
from vininfo.core.clock import as_utc, utcnow
from vininfo.core.exceptions import AuthError, ConfigError

PURPOSE_SESSION = "session"
PURPOSE_UNSUBSCRIBE_PREFIX = "unsubscribe-"

PREFERENCE_NOTIFICATIONS = "notifications"
PREFERENCE_MARKETING = "marketing"
PREFERENCES = (PREFERENCE_NOTIFICATIONS, PREFERENCE_MARKETING)


@dataclass(frozen=True)
class UnsubscribeClaims:
    user_id: str
    preference: str


class TokenService:
    """Issues and verifies tamper-evident, self-expiring tokens."""

    def __init__(self, settings: Optional[Settings] = None, now: Callable[[], datetime] = utcnow):
        self.settings = settings or get_settings()
        self._now = now

    def _secret(self) -> str:
        secret = self.settings.JWT_SECRET
        if not secret:
            raise ConfigError("JWT_SECRET is not configured")
        return secret

    def ensure_configured(self) -> None:
        self._secret()

    def _encode(self, claims: dict, lifetime: timedelta) -> str:
        issued_at = self._now()
        payload = dict(claims)
        payload.update({
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + lifetime).timestamp()),
        })
        return jwt.encode(payload, self._secret(), algorithm=self.settings.JWT_ALGORITHM)

    def _decode(self, token: str) -> dict:
        secret = self._secret()
        if not token:
            raise AuthError()
        try:
            # Expiry is checked against the injected clock, not wall time.
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.settings.JWT_ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError:
            raise AuthError()

        expires_at = payload.get("exp")
        if not isinstance(expires_at, (int, float)) or expires_at <= self._now().timestamp():
            raise AuthError()
        return payload

    # -- Session tokens ------------------------------------------------------

    def issue_session_token(self, user_id: str) -> str:
        return self._encode(
            {"sub": str(user_id), "purpose": PURPOSE_SESSION},
            timedelta(days=self.settings.SESSION_TOKEN_DAYS),
        )

    def verify_session_token(self, token: str) -> str:
        """Return the user id of a valid session token or raise AuthError."""
        payload = self._decode(token)
        user_id = payload.get("sub")
        if payload.get("purpose") != PURPOSE_SESSION or not user_id:
            raise AuthError()
        return user_id

    @staticmethod
    def decode_unverified(token: Optional[str]) -> Optional[str]:
        """Best-effort user id without a signature check. Never use for access control."""
        if not token:
            return None
        try:
            claims = jwt.get_unverified_claims(token)
        except JWTError:
            return None
        user_id = claims.get("sub")
        return user_id if isinstance(user_id, str) else None

    # -- Unsubscribe tokens --------------------------------------------------

    def issue_unsubscribe_token(self, user_id: str, preference: str) -> str:
        if preference not in PREFERENCES:
            raise ValueError(f"Unknown preference: {preference}")
        return self._encode(
            {
                "sub": str(user_id),
                "purpose": PURPOSE_UNSUBSCRIBE_PREFIX + preference,
                "pref": preference,
            },
            timedelta(days=self.settings.UNSUBSCRIBE_TOKEN_DAYS),
        )

    def verify_unsubscribe_token(self, token: str) -> UnsubscribeClaims:
        payload = self._decode(token)
        user_id = payload.get("sub")
        preference = payload.get("pref")
        if (
            not user_id
            or preference not in PREFERENCES
            or payload.get("purpose") != PURPOSE_UNSUBSCRIBE_PREFIX + preference
        ):
            raise AuthError()
        return UnsubscribeClaims(user_id=user_id, preference=preference)

    # -- Verification codes --------------------------------------------------

    @staticmethod
    def generate_verification_code() -> str:
        """Six-digit code drawn uniformly from [100000, 999999]."""
        return str(100000 + secrets.randbelow(900000))

    def verification_expiry(self, sent_at: datetime) -> datetime:
        return sent_at + timedelta(hours=self.settings.VERIFICATION_CODE_TTL_HOURS)

    def resend_retry_after(
        self,
        sent_at: Optional[datetime],
        expires_at: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> int:
        """Seconds until another verification email may be sent (0 = allowed now).

        Rows written before ``email_verification_sent_at`` existed only carry
        the expiry; for those the send time is expiry minus the code TTL.
        """
        sent_at = as_utc(sent_at)
        if sent_at is None and expires_at is not None:
            sent_at = as_utc(expires_at) - timedelta(hours=self.settings.VERIFICATION_CODE_TTL_HOURS)
        if sent_at is None:
            return 0

        elapsed = ((now or self._now()) - sent_at).total_seconds()
        remaining = self.settings.VERIFICATION_RESEND_COOLDOWN_SECONDS - elapsed
        if remaining <= 0:
            return 0
        return math.ceil(remaining)
