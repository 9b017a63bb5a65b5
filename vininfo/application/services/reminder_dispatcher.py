"""Reminder dispatcher — emails every reminder whose send date has arrived.

Runs from the daily scheduler job and from the cron endpoint. Each reminder
is claimed before sending and marked sent afterwards, so overlapping runs
never email the same reminder twice. A failed send releases the claim and the
reminder is retried on the next run.
"""

import asyncio
from datetime import date, timedelta
from typing import Awaitable, Callable, Optional

import structlog
from sqlalchemy.orm import Session

from vininfo.application.services.email_templates import render_reminder_email
from vininfo.application.services.token_service import PREFERENCE_NOTIFICATIONS, TokenService
from vininfo.config import Settings, get_settings
from vininfo.core.clock import utc_today, utcnow
from vininfo.core.exceptions import ConfigError
from vininfo.domain.models.reminder import Reminder
from vininfo.domain.schemas.notification import DispatchError, DispatchSummary
from vininfo.infrastructure.email_client import EmailClient, EmailDeliveryError
from vininfo.infrastructure.repositories.reminder_repository import SQLAlchemyReminderRepository

logger = structlog.get_logger(__name__)


def unsubscribe_url(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/api/email/unsubscribe?token={token}"


class ReminderDispatcher:
    def __init__(
        self,
        db: Session,
        email_client: EmailClient,
        tokens: TokenService,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.settings = settings or get_settings()
        self.db = db
        self.repo = SQLAlchemyReminderRepository(db, Reminder)
        self.email_client = email_client
        self.tokens = tokens
        self._sleep = sleep

    async def run(self, today: Optional[date] = None) -> DispatchSummary:
        today = today or utc_today()
        reminders = self.repo.get_due_for_email(today)

        if not reminders:
            logger.info("No reminders to send", today=str(today))
            return DispatchSummary(message="No reminders to send")

        self.email_client.ensure_configured()
        self.tokens.ensure_configured()

        summary = DispatchSummary(message="", total=len(reminders))
        logger.info("Dispatching reminder emails", total=summary.total, today=str(today))

        for index, reminder in enumerate(reminders):
            if index > 0:
                await self._sleep(self.settings.EMAIL_SEND_INTERVAL_SECONDS)

            now = utcnow()
            stale_before = now - timedelta(minutes=self.settings.EMAIL_CLAIM_TIMEOUT_MINUTES)
            try:
                claimed = self.repo.claim_for_email(reminder.id, now, stale_before)
            except Exception as e:
                logger.exception("Could not claim reminder", reminder_id=reminder.id)
                self.db.rollback()
                summary.errors.append(DispatchError(reminder_id=reminder.id, error=str(e)))
                continue
            if not claimed:
                logger.info("Reminder claimed by another run", reminder_id=reminder.id)
                summary.skipped += 1
                continue

            try:
                await self._send(reminder)
            except ConfigError:
                self._release_claim(reminder.id)
                raise
            except EmailDeliveryError as e:
                logger.warning("Reminder email failed", reminder_id=reminder.id, error=e.reason)
                self._release_claim(reminder.id)
                summary.errors.append(DispatchError(reminder_id=reminder.id, error=e.reason))
                continue
            except Exception as e:
                logger.exception("Reminder email failed", reminder_id=reminder.id)
                self._release_claim(reminder.id)
                summary.errors.append(DispatchError(reminder_id=reminder.id, error=str(e)))
                continue

            try:
                self.repo.mark_email_sent(reminder.id, utcnow())
            except Exception as e:
                # The email is out. The claim stays until it goes stale and a later run resends.
                logger.exception("Could not mark reminder as sent", reminder_id=reminder.id)
                self.db.rollback()
                summary.errors.append(DispatchError(reminder_id=reminder.id, error=str(e)))
                continue
            summary.sent += 1

        summary.message = f"Sent {summary.sent} of {summary.total} reminders"
        logger.info(
            "Reminder dispatch finished",
            sent=summary.sent,
            total=summary.total,
            skipped=summary.skipped,
            failed=len(summary.errors),
        )
        return summary

    def _release_claim(self, reminder_id: str) -> None:
        try:
            self.db.rollback()
            self.repo.release_email_claim(reminder_id)
        except Exception:
            logger.exception("Could not release reminder claim", reminder_id=reminder_id)
            self.db.rollback()

    async def _send(self, reminder: Reminder) -> None:
        token = self.tokens.issue_unsubscribe_token(reminder.user_id, PREFERENCE_NOTIFICATIONS)
        subject, html = render_reminder_email(
            vehicle_name=reminder.vehicle.display_name,
            type_label=reminder.type_label,
            due_date=reminder.due_date,
            note=reminder.note,
            unsubscribe_url=unsubscribe_url(self.settings.BASE_URL, token),
            base_url=self.settings.BASE_URL,
        )
        await self.email_client.send(reminder.user.email, subject, html)
