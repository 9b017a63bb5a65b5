"""
SQLAlchemy Implementation of Reminder Repository.
"""

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import contains_eager

from vininfo.domain.models.reminder import Reminder
from vininfo.domain.models.user import User
from vininfo.domain.models.vehicle import Vehicle
from vininfo.domain.repositories.reminder_repository import ReminderRepository
from vininfo.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyReminderRepository(SQLAlchemyRepository[Reminder], ReminderRepository):
    """Reminder repository implementation using SQLAlchemy."""

    def list_for_user(self, user_id: str, vehicle_id: Optional[str] = None) -> List[Reminder]:
        query = self.db.query(Reminder).filter(Reminder.user_id == user_id)
        if vehicle_id:
            query = query.filter(Reminder.vehicle_id == vehicle_id)
        return query.order_by(Reminder.due_date.asc(), Reminder.created_at.asc()).all()

    def get_owned(self, reminder_id: str, user_id: str) -> Optional[Reminder]:
        return (
            self.db.query(Reminder)
            .filter(Reminder.id == reminder_id, Reminder.user_id == user_id)
            .first()
        )

    def get_due_for_email(self, today: date) -> List[Reminder]:
        return (
            self.db.query(Reminder)
            .join(User, Reminder.user_id == User.id)
            .join(Vehicle, Reminder.vehicle_id == Vehicle.id)
            .options(contains_eager(Reminder.user), contains_eager(Reminder.vehicle))
            .filter(
                Reminder.email_enabled.is_(True),
                Reminder.email_send_at <= today,
                Reminder.email_sent_at.is_(None),
                User.email_verified_at.isnot(None),
                User.notifications_enabled.is_(True),
            )
            .order_by(Reminder.due_date.asc(), Reminder.created_at.asc())
            .all()
        )

    def claim_for_email(self, reminder_id: str, now: datetime, stale_before: datetime) -> bool:
        claimed = (
            self.db.query(Reminder)
            .filter(
                Reminder.id == reminder_id,
                Reminder.email_sent_at.is_(None),
                or_(Reminder.email_claimed_at.is_(None), Reminder.email_claimed_at < stale_before),
            )
            .update({Reminder.email_claimed_at: now}, synchronize_session=False)
        )
        self.db.commit()
        return claimed > 0

    def mark_email_sent(self, reminder_id: str, now: datetime) -> bool:
        updated = (
            self.db.query(Reminder)
            .filter(Reminder.id == reminder_id, Reminder.email_sent_at.is_(None))
            .update(
                {Reminder.email_sent_at: now, Reminder.email_claimed_at: None},
                synchronize_session=False,
            )
        )
        self.db.commit()
        return updated > 0

    def release_email_claim(self, reminder_id: str) -> None:
        (
            self.db.query(Reminder)
            .filter(Reminder.id == reminder_id, Reminder.email_sent_at.is_(None))
            .update({Reminder.email_claimed_at: None}, synchronize_session=False)
        )
        self.db.commit()
