"""Pydantic schemas for reminders."""

from datetime import date, datetime, timedelta
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from vininfo.core.clock import utc_today
from vininfo.domain.models.reminder import NOTE_MAX_LENGTH, ReminderType
from vininfo.domain.schemas.auth import CamelModel


def _require_future(value: Optional[date]) -> Optional[date]:
    if value is not None and value < utc_today() + timedelta(days=1):
        raise ValueError("Datum musí být nejdříve zítra")
    return value


class ReminderCreate(CamelModel):
    vehicle_id: str
    type: ReminderType
    due_date: date
    note: Optional[str] = Field(default=None, max_length=NOTE_MAX_LENGTH)
    email_enabled: bool = True
    email_send_at: Optional[date] = None

    @field_validator("due_date", "email_send_at")
    @classmethod
    def dates_in_future(cls, value):
        return _require_future(value)


class ReminderUpdate(CamelModel):
    due_date: Optional[date] = None
    note: Optional[str] = Field(default=None, max_length=NOTE_MAX_LENGTH)
    is_done: Optional[bool] = None
    email_enabled: Optional[bool] = None
    email_send_at: Optional[date] = None

    @field_validator("due_date", "email_send_at")
    @classmethod
    def dates_in_future(cls, value):
        return _require_future(value)


class ReminderRead(BaseModel):
    id: str
    vehicle_id: str
    type: str
    due_date: date
    note: Optional[str] = None
    is_done: bool
    created_at: Optional[datetime] = None
    email_enabled: bool
    email_send_at: Optional[date] = None
    email_sent_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
