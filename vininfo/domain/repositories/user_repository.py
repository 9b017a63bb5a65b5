"""
User Repository Interface.
"""

from typing import List, Optional

from vininfo.domain.repositories.base import BaseRepository
from vininfo.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by normalized email."""
        ...

    def list_marketing_recipients(self) -> List[User]:
        """Users with marketing enabled, oldest account first."""
        ...

    def set_preference(self, user_id: str, field: str, value: bool) -> bool:
        """Set one preference flag. Returns False when the user does not exist."""
        ...
