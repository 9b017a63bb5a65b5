"""
Reminder Repository Interface.
Includes the dispatch queries used by the reminder email job.
"""

from datetime import date, datetime
from typing import List, Optional

from vininfo.domain.repositories.base import BaseRepository
from vininfo.domain.models.reminder import Reminder


class ReminderRepository(BaseRepository[Reminder]):
    """Interface for Reminder-specific operations."""

    def list_for_user(self, user_id: str, vehicle_id: Optional[str] = None) -> List[Reminder]:
        """Reminders of a user (optionally one vehicle), earliest due date first."""
        ...

    def get_owned(self, reminder_id: str, user_id: str) -> Optional[Reminder]:
        ...

    def get_due_for_email(self, today: date) -> List[Reminder]:
        """Reminders whose notification email should go out on or before ``today``.

        Eligible when email is enabled, the send date has arrived, nothing was
        sent yet, the owner has a verified email with notifications on, and
        the vehicle still exists. Ordered by due date ascending.
        """
        ...

    def claim_for_email(self, reminder_id: str, now: datetime, stale_before: datetime) -> bool:
        """Atomically claim an unsent reminder. False if already sent or claimed by a live run."""
        ...

    def mark_email_sent(self, reminder_id: str, now: datetime) -> bool:
        """Set email_sent_at once. False if it was already set."""
        ...

    def release_email_claim(self, reminder_id: str) -> None:
        ...
