"""Admin routes — marketing broadcast."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vininfo.application.services.marketing_service import MarketingBroadcaster
from vininfo.application.services.token_service import TokenService
from vininfo.config import Settings, get_settings
from vininfo.domain.schemas.notification import MarketingCampaign
from vininfo.infrastructure.database import get_db
from vininfo.infrastructure.email_client import EmailClient
from vininfo.interfaces.api.deps import require_admin_secret
from vininfo.interfaces.deps import get_email_client, get_token_service

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.post("/send-marketing", dependencies=[Depends(require_admin_secret)])
async def send_marketing(
    campaign: MarketingCampaign,
    db: Session = Depends(get_db),
    email_client: EmailClient = Depends(get_email_client),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
):
    summary = await MarketingBroadcaster(db, email_client, tokens, settings).send(campaign)
    return summary.to_response(testMode=bool(campaign.test_email))
