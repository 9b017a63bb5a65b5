"""Cron trigger for the reminder email batch."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vininfo.application.services.reminder_dispatcher import ReminderDispatcher
from vininfo.application.services.token_service import TokenService
from vininfo.config import Settings, get_settings
from vininfo.infrastructure.database import get_db
from vininfo.infrastructure.email_client import EmailClient
from vininfo.interfaces.api.deps import require_cron_secret
from vininfo.interfaces.deps import get_email_client, get_token_service

router = APIRouter(prefix="/api/cron", tags=["Cron"])


@router.get("/send-reminders", dependencies=[Depends(require_cron_secret)])
async def send_reminders(
    db: Session = Depends(get_db),
    email_client: EmailClient = Depends(get_email_client),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
):
    summary = await ReminderDispatcher(db, email_client, tokens, settings).run()
    return summary.to_response()
