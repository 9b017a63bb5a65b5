"""Reminder service — CRUD plus notification send-date scheduling.

Dates are pure calendar dates. The API layer rejects due dates and custom
send dates earlier than tomorrow; nothing below it re-validates that.
"""

from datetime import date, timedelta
from typing import List, Optional

import structlog
from sqlalchemy.orm import Session

from vininfo.core.exceptions import NotFoundError, ValidationError
from vininfo.domain.models.reminder import Reminder
from vininfo.domain.models.vehicle import Vehicle
from vininfo.domain.schemas.reminder import ReminderCreate, ReminderUpdate
from vininfo.infrastructure.repositories.reminder_repository import SQLAlchemyReminderRepository
from vininfo.infrastructure.repositories.vehicle_repository import SQLAlchemyVehicleRepository

logger = structlog.get_logger(__name__)

DEFAULT_LEAD_DAYS = 1


def compute_email_send_at(due_date: date, email_enabled: bool, explicit: Optional[date] = None) -> Optional[date]:
    """Send date for a reminder email: explicit if given, else one day before the due date."""
    if not email_enabled:
        return None
    if explicit is not None:
        return explicit
    return due_date - timedelta(days=DEFAULT_LEAD_DAYS)


def list_reminders(db: Session, user_id: str, vehicle_id: Optional[str] = None) -> List[Reminder]:
    return SQLAlchemyReminderRepository(db, Reminder).list_for_user(user_id, vehicle_id)


def create_reminder(db: Session, user_id: str, body: ReminderCreate) -> Reminder:
    vehicle = SQLAlchemyVehicleRepository(db, Vehicle).get_owned(body.vehicle_id, user_id)
    if vehicle is None:
        raise NotFoundError("Vozidlo nenalezeno")

    reminder = SQLAlchemyReminderRepository(db, Reminder).create({
        "user_id": user_id,
        "vehicle_id": vehicle.id,
        "type": body.type.value,
        "due_date": body.due_date,
        "note": body.note,
        "email_enabled": body.email_enabled,
        "email_send_at": compute_email_send_at(body.due_date, body.email_enabled, body.email_send_at),
    })
    logger.info("Reminder created", reminder_id=reminder.id, type=reminder.type, email_send_at=str(reminder.email_send_at))
    return reminder


def update_reminder(db: Session, user_id: str, reminder_id: str, body: ReminderUpdate) -> Reminder:
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("Nejsou zadána žádná pole ke změně")

    repo = SQLAlchemyReminderRepository(db, Reminder)
    reminder = repo.get_owned(reminder_id, user_id)
    if reminder is None:
        raise NotFoundError("Připomínka nenalezena")

    for field in ("due_date", "is_done", "email_enabled"):
        if changes.get(field) is None:
            changes.pop(field, None)

    # Finishing a reminder silences its email unless the caller says otherwise
    if changes.get("is_done") is True and "email_enabled" not in changes:
        changes["email_enabled"] = False

    email_enabled = changes.get("email_enabled", reminder.email_enabled)
    due_date = changes.get("due_date", reminder.due_date)
    send_at = changes.get("email_send_at", reminder.email_send_at)
    if email_enabled and send_at is None:
        changes["email_send_at"] = compute_email_send_at(due_date, True)

    return repo.update(reminder, changes)


def delete_reminder(db: Session, user_id: str, reminder_id: str) -> None:
    repo = SQLAlchemyReminderRepository(db, Reminder)
    reminder = repo.get_owned(reminder_id, user_id)
    if reminder is None:
        raise NotFoundError("Připomínka nenalezena")
    repo.delete(reminder.id)
