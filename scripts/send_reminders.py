"""Run one reminder email dispatch from the command line."""

import asyncio
import os
import sys

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from vininfo.application.services.reminder_dispatcher import ReminderDispatcher
from vininfo.application.services.token_service import TokenService
from vininfo.config import get_settings
from vininfo.core.logging import configure_logging
from vininfo.infrastructure.database import SessionLocal, ensure_schema
from vininfo.infrastructure.email_client import EmailClient


async def main() -> int:
    settings = get_settings()
    configure_logging(settings)
    ensure_schema()

    db = SessionLocal()
    try:
        dispatcher = ReminderDispatcher(db, EmailClient(settings), TokenService(settings), settings)
        summary = await dispatcher.run()
    finally:
        db.close()

    print(summary.message)
    for error in summary.errors:
        print(f"  {error.reminder_id}: {error.error}")
    return 1 if summary.errors else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
