"""Email preference service — settings page and one-click unsubscribe."""

import structlog
from sqlalchemy.orm import Session

from vininfo.application.services.token_service import PREFERENCE_MARKETING, TokenService, UnsubscribeClaims
from vininfo.core.exceptions import NotFoundError, ValidationError
from vininfo.domain.models.user import User
from vininfo.domain.schemas.preferences import PreferencesUpdate
from vininfo.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

logger = structlog.get_logger(__name__)

PREFERENCE_COLUMNS = {
    "notifications": "notifications_enabled",
    "marketing": "marketing_enabled",
}


def update_preferences(db: Session, user: User, body: PreferencesUpdate) -> User:
    changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if isinstance(v, bool)}
    if not changes:
        raise ValidationError("Nejsou zadána žádná pole ke změně")
    return SQLAlchemyUserRepository(db, User).update(user, changes)


def unsubscribe(db: Session, tokens: TokenService, token: str) -> UnsubscribeClaims:
    """Verify an unsubscribe token and switch the preference off.

    Replaying a token is harmless: the flag is already off.
    """
    claims = tokens.verify_unsubscribe_token(token)
    found = SQLAlchemyUserRepository(db, User).set_preference(
        claims.user_id, PREFERENCE_COLUMNS[claims.preference], False
    )
    if not found:
        raise NotFoundError("Uživatel nenalezen")
    logger.info("Unsubscribed", user_id=claims.user_id, preference=claims.preference)
    return claims


def unsubscribe_label(preference: str) -> str:
    return "marketingových emailů" if preference == PREFERENCE_MARKETING else "notifikačních emailů"
