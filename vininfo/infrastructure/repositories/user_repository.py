"""
SQLAlchemy Implementation of User Repository.
"""

from typing import List, Optional

from vininfo.domain.models.user import User
from vininfo.domain.repositories.user_repository import UserRepository
from vininfo.infrastructure.repositories.base_repository import SQLAlchemyRepository

PREFERENCE_FIELDS = {"notifications_enabled", "marketing_enabled"}


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def list_marketing_recipients(self) -> List[User]:
        return (
            self.db.query(User)
            .filter(User.marketing_enabled.is_(True))
            .order_by(User.created_at.asc(), User.id.asc())
            .all()
        )

    def set_preference(self, user_id: str, field: str, value: bool) -> bool:
        if field not in PREFERENCE_FIELDS:
            raise ValueError(f"Unknown preference field: {field}")
        updated = (
            self.db.query(User)
            .filter(User.id == user_id)
            .update({field: value}, synchronize_session="fetch")
        )
        self.db.commit()
        return updated > 0
