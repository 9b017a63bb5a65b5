"""
Generic SQLAlchemy repository shared by the user, vehicle and reminder repositories.
"""

from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from vininfo.domain.repositories.base import BaseRepository
from vininfo.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Each write commits and refreshes, so callers get server defaults back."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def _save(self, obj: ModelType) -> ModelType:
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def get_by_id(self, id: str) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def create(self, values: Dict[str, Any]) -> ModelType:
        return self._save(self.model(**values))

    def update(self, obj: ModelType, changes: Dict[str, Any]) -> ModelType:
        for field, value in changes.items():
            if not hasattr(obj, field):
                raise AttributeError(f"{self.model.__name__} has no field {field!r}")
            setattr(obj, field, value)
        return self._save(obj)

    def delete(self, id: str) -> bool:
        obj = self.get_by_id(id)
        if obj is None:
            return False
        self.db.delete(obj)
        self.db.commit()
        return True
