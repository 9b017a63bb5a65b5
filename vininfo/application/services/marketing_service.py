"""Marketing broadcast — one campaign email to every opted-in user."""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

import structlog
from sqlalchemy.orm import Session

from vininfo.application.services.email_templates import render_marketing_email
from vininfo.application.services.reminder_dispatcher import unsubscribe_url
from vininfo.application.services.token_service import PREFERENCE_MARKETING, TokenService
from vininfo.config import Settings, get_settings
from vininfo.core.exceptions import ConfigError
from vininfo.domain.models.user import User
from vininfo.domain.schemas.notification import DispatchError, DispatchSummary, MarketingCampaign
from vininfo.infrastructure.email_client import EmailClient, EmailDeliveryError
from vininfo.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

logger = structlog.get_logger(__name__)

TEST_USER_ID = "test-user-id"


@dataclass
class Recipient:
    user_id: str
    email: str


class MarketingBroadcaster:
    def __init__(
        self,
        db: Session,
        email_client: EmailClient,
        tokens: TokenService,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.settings = settings or get_settings()
        self.users = SQLAlchemyUserRepository(db, User)
        self.email_client = email_client
        self.tokens = tokens
        self._sleep = sleep

    def recipients(self, test_email: Optional[str] = None) -> List[Recipient]:
        """Opted-in users oldest first, or the single test address."""
        if test_email:
            email = test_email.strip().lower()
            user = self.users.get_by_email(email)
            return [Recipient(user_id=user.id if user else TEST_USER_ID, email=email)]
        return [Recipient(user_id=u.id, email=u.email) for u in self.users.list_marketing_recipients()]

    async def send(self, campaign: MarketingCampaign) -> DispatchSummary:
        self.email_client.ensure_configured()
        self.tokens.ensure_configured()

        recipients = self.recipients(campaign.test_email)
        summary = DispatchSummary(message="", total=len(recipients))
        logger.info("Sending marketing campaign", total=summary.total, test_mode=bool(campaign.test_email))

        for index, recipient in enumerate(recipients):
            if index > 0:
                await self._sleep(self.settings.EMAIL_SEND_INTERVAL_SECONDS)

            token = self.tokens.issue_unsubscribe_token(recipient.user_id, PREFERENCE_MARKETING)
            html = render_marketing_email(
                subject=campaign.subject,
                heading=campaign.heading,
                content=campaign.content,
                unsubscribe_url=unsubscribe_url(self.settings.BASE_URL, token),
                preheader=campaign.preheader,
                cta_text=campaign.cta_text,
                cta_url=campaign.cta_url,
            )
            try:
                await self.email_client.send(recipient.email, campaign.subject, html)
            except ConfigError:
                raise
            except EmailDeliveryError as e:
                logger.warning("Marketing email failed", user_id=recipient.user_id, error=e.reason)
                summary.errors.append(DispatchError(recipient=recipient.email, error=e.reason))
                continue
            except Exception as e:
                logger.exception("Marketing email failed", user_id=recipient.user_id)
                summary.errors.append(DispatchError(recipient=recipient.email, error=str(e)))
                continue
            summary.sent += 1

        summary.message = f"Sent {summary.sent} of {summary.total} marketing emails"
        logger.info("Marketing campaign finished", sent=summary.sent, total=summary.total, failed=len(summary.errors))
        return summary
