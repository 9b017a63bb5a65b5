"""Pydantic schemas for batch email runs."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from vininfo.domain.schemas.auth import CamelModel


class DispatchError(BaseModel):
    reminder_id: Optional[str] = None
    recipient: Optional[str] = None
    error: str


class DispatchSummary(BaseModel):
    message: str
    sent: int = 0
    total: int = 0
    skipped: int = 0
    errors: list[DispatchError] = Field(default_factory=list)

    def to_response(self, **extra: Any) -> dict:
        body = {"message": self.message, "sent": self.sent, "total": self.total, **extra}
        if self.errors:
            body["errors"] = [e.model_dump(exclude_none=True) for e in self.errors]
        return body


class MarketingCampaign(CamelModel):
    subject: str = Field(min_length=1)
    preheader: Optional[str] = None
    heading: str = Field(min_length=1)
    content: str = Field(min_length=1)  # trusted operator HTML
    cta_text: Optional[str] = None
    cta_url: Optional[str] = None
    test_email: Optional[str] = None
