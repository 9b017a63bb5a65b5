"""Pydantic schemas for email preferences."""

from typing import Optional

from pydantic import BaseModel

from vininfo.domain.schemas.auth import CamelModel


class PreferencesUpdate(CamelModel):
    notifications_enabled: Optional[bool] = None
    marketing_enabled: Optional[bool] = None


class PreferencesRead(BaseModel):
    notifications_enabled: bool
    marketing_enabled: bool

    model_config = {"from_attributes": True}
