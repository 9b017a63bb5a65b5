"""Pydantic schemas for User and Auth."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional


class CamelModel(BaseModel):
    """Request body accepting the frontend's camelCase keys (snake_case also works)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    email: str
    password: str
    terms_accepted: bool = False
    marketing_enabled: bool = True


class LoginRequest(CamelModel):
    email: str
    password: str


class VerifyEmailRequest(CamelModel):
    code: str = Field(min_length=1)


class UserRead(BaseModel):
    id: str
    email: str
    created_at: Optional[datetime] = None
    terms_accepted_at: Optional[datetime] = None
    email_verified_at: Optional[datetime] = None
    notifications_enabled: bool
    marketing_enabled: bool

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    user: UserRead


class RegisterResponse(BaseModel):
    user: UserRead
    needsVerification: bool = True
    verificationCode: Optional[str] = None


class ResendVerificationResponse(BaseModel):
    success: bool = True
    verificationCode: Optional[str] = None
