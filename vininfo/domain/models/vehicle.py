"""Vehicle domain model — a saved registry lookup owned by a user."""

import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey, Index, JSON, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from vininfo.infrastructure.database import Base

TITLE_MAX_LENGTH = 60


class Vehicle(Base):
    __tablename__ = "vehicles"
    __table_args__ = (
        # Only VIN is a dedup key; TP/ORV duplicates are allowed.
        Index(
            "vehicles_user_vin_unique",
            "user_id",
            "vin",
            unique=True,
            postgresql_where=text("vin IS NOT NULL"),
            sqlite_where=text("vin IS NOT NULL"),
        ),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vin = Column(String(32), nullable=True)
    tp = Column(String(32), nullable=True)
    orv = Column(String(32), nullable=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=True)
    brand = Column(String(100), nullable=True)
    model = Column(String(100), nullable=True)
    snapshot = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    user = relationship("User", back_populates="vehicles")
    reminders = relationship("Reminder", back_populates="vehicle", cascade="all, delete")

    @property
    def display_name(self) -> str:
        """Title if set, otherwise "brand model" with a generic placeholder brand."""
        if self.title and self.title.strip():
            return self.title.strip()
        return f"{self.brand or 'Vozidlo'} {self.model or ''}".strip()

    def __repr__(self):
        return f"<Vehicle {self.vin or self.tp or self.orv}>"
