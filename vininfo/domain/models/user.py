"""User domain model — maps to the 'users' table."""

import uuid

from sqlalchemy import Column, String, Boolean, DateTime, true
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from vininfo.infrastructure.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lower-cased
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    terms_accepted_at = Column(DateTime(timezone=True), nullable=True)

    # Email verification: code, expiry and sent-at are set and cleared together
    email_verified_at = Column(DateTime(timezone=True), nullable=True)
    email_verification_code = Column(String(6), nullable=True)
    email_verification_expires_at = Column(DateTime(timezone=True), nullable=True)
    email_verification_sent_at = Column(DateTime(timezone=True), nullable=True)

    # Preferences
    notifications_enabled = Column(Boolean, nullable=False, default=True, server_default=true())
    marketing_enabled = Column(Boolean, nullable=False, default=True, server_default=true())

    vehicles = relationship("Vehicle", back_populates="user", cascade="all, delete", passive_deletes=True)
    reminders = relationship("Reminder", back_populates="user", cascade="all, delete", passive_deletes=True)

    @property
    def is_verified(self) -> bool:
        return self.email_verified_at is not None

    def __repr__(self):
        return f"<User {self.id}>"
