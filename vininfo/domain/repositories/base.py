"""
Repository contract shared by every aggregate.
"""

from typing import Any, Dict, Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):

    def get_by_id(self, id: str) -> Optional[T]:
        ...

    def create(self, values: Dict[str, Any]) -> T:
        ...

    def update(self, obj: T, changes: Dict[str, Any]) -> T:
        """Apply ``changes`` field by field and persist."""
        ...

    def delete(self, id: str) -> bool:
        """False when no row had that id."""
        ...
