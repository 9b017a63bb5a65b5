"""APScheduler jobs — daily reminder email dispatch."""

import pytz
import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from vininfo.application.services.reminder_dispatcher import ReminderDispatcher
from vininfo.application.services.token_service import TokenService
from vininfo.config import get_settings
from vininfo.infrastructure.database import SessionLocal
from vininfo.infrastructure.email_client import EmailClient

settings = get_settings()
logger = structlog.get_logger(__name__)
tz = pytz.timezone(settings.TIMEZONE)

scheduler = AsyncIOScheduler(timezone=tz)


async def reminder_email_job():
    """Send every reminder email whose send date has arrived."""
    logger.info("Running reminder email job")

    db = SessionLocal()
    try:
        dispatcher = ReminderDispatcher(db, EmailClient(settings), TokenService(settings), settings)
        summary = await dispatcher.run()
        logger.info("Reminder email job finished", sent=summary.sent, total=summary.total)
    except Exception:
        logger.exception("Reminder email job failed")
    finally:
        db.close()


def start_scheduler():
    scheduler.add_job(
        reminder_email_job,
        trigger=CronTrigger(hour=settings.REMINDER_JOB_HOUR, minute=0, timezone=tz),
        id="daily_reminder_emails",
        name=f"Reminder emails (daily {settings.REMINDER_JOB_HOUR:02d}:00)",
        replace_existing=True,
    )
    scheduler.start()
    logger.info("Scheduler started", hour=settings.REMINDER_JOB_HOUR, timezone=settings.TIMEZONE)


def stop_scheduler():
    """Stop the scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
