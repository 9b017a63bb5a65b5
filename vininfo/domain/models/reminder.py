"""Reminder domain model — a scheduled notification tied to one vehicle."""

import enum
import uuid

from sqlalchemy import Column, String, Boolean, Date, DateTime, ForeignKey, Index, Text, text, true, false
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from vininfo.infrastructure.database import Base

NOTE_MAX_LENGTH = 200


class ReminderType(str, enum.Enum):
    stk = "stk"
    povinne_ruceni = "povinne_ruceni"
    havarijni_pojisteni = "havarijni_pojisteni"
    servis = "servis"
    prezuti_pneu = "prezuti_pneu"
    dalnicni_znamka = "dalnicni_znamka"
    jine = "jine"

    @property
    def label(self) -> str:
        return REMINDER_TYPE_LABELS[self]


REMINDER_TYPE_LABELS = {
    ReminderType.stk: "Termín STK",
    ReminderType.povinne_ruceni: "Povinné ručení",
    ReminderType.havarijni_pojisteni: "Havarijní pojištění",
    ReminderType.servis: "Servisní prohlídka",
    ReminderType.prezuti_pneu: "Přezutí pneu",
    ReminderType.dalnicni_znamka: "Dálniční známka",
    ReminderType.jine: "Jiné",
}


class Reminder(Base):
    __tablename__ = "reminders"
    __table_args__ = (
        Index("reminders_user_due_idx", "user_id", "due_date"),
        Index(
            "reminders_email_send_idx",
            "email_send_at",
            postgresql_where=text("email_enabled = true"),
            sqlite_where=text("email_enabled = 1"),
        ),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(32), nullable=False)
    due_date = Column(Date, nullable=False)
    note = Column(Text, nullable=True)
    is_done = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Email notification
    email_enabled = Column(Boolean, nullable=False, default=True, server_default=true())
    email_send_at = Column(Date, nullable=True)
    email_sent_at = Column(DateTime(timezone=True), nullable=True)  # terminal, set once
    email_claimed_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="reminders")
    vehicle = relationship("Vehicle", back_populates="reminders")

    @property
    def type_label(self) -> str:
        try:
            return ReminderType(self.type).label
        except ValueError:
            return self.type

    def __repr__(self):
        return f"<Reminder {self.type} {self.due_date}>"
