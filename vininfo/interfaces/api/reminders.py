"""Reminders API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from vininfo.application.services.reminder_service import (
    create_reminder,
    delete_reminder,
    list_reminders,
    update_reminder,
)
from vininfo.domain.schemas.reminder import ReminderCreate, ReminderRead, ReminderUpdate
from vininfo.infrastructure.database import get_db
from vininfo.interfaces.api.deps import get_current_user_id

router = APIRouter(prefix="/api/client/reminders", tags=["Reminders"])


@router.get("")
def get_reminders(
    vehicle_id: Optional[str] = Query(None, alias="vehicleId"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    reminders = list_reminders(db, user_id, vehicle_id)
    return {"reminders": [ReminderRead.model_validate(r) for r in reminders]}


@router.post("", status_code=status.HTTP_201_CREATED)
def add_reminder(
    body: ReminderCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return {"reminder": ReminderRead.model_validate(create_reminder(db, user_id, body))}


@router.patch("/{reminder_id}")
def edit_reminder(
    reminder_id: str,
    body: ReminderUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return {"reminder": ReminderRead.model_validate(update_reminder(db, user_id, reminder_id, body))}


@router.delete("/{reminder_id}")
def remove_reminder(
    reminder_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    delete_reminder(db, user_id, reminder_id)
    return {"success": True}
