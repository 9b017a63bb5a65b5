"""Auth API routes — register, login, logout, me, email verification."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from vininfo.application.services.auth_service import (
    authenticate_user,
    register_user,
    resend_verification,
    verify_email,
)
from vininfo.application.services.token_service import TokenService
from vininfo.config import Settings, get_settings
from vininfo.domain.models.user import User
from vininfo.domain.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    ResendVerificationResponse,
    UserRead,
    UserResponse,
    VerifyEmailRequest,
)
from vininfo.infrastructure.database import get_db
from vininfo.infrastructure.email_client import EmailClient
from vininfo.interfaces.api.deps import (
    clear_session_cookie,
    get_current_user,
    get_current_user_id,
    set_session_cookie,
)
from vininfo.interfaces.deps import get_email_client, get_token_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    email_client: EmailClient = Depends(get_email_client),
    settings: Settings = Depends(get_settings),
):
    registration = await register_user(db, body, tokens, email_client)
    set_session_cookie(response, registration.session_token, settings)
    return RegisterResponse(
        user=UserRead.model_validate(registration.user),
        verificationCode=None if settings.is_production else registration.verification_code,
    )


@router.post("/login", response_model=UserResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
):
    user = authenticate_user(db, body.email, body.password)
    set_session_cookie(response, tokens.issue_session_token(user.id), settings)
    return UserResponse(user=UserRead.model_validate(user))


@router.post("/logout")
def logout(response: Response, settings: Settings = Depends(get_settings)):
    clear_session_cookie(response, settings)
    return {"success": True}


@router.get("/me", response_model=UserResponse)
def get_me(user: User = Depends(get_current_user)):
    return UserResponse(user=UserRead.model_validate(user))


@router.post("/verify-email", response_model=UserResponse)
def verify(
    body: VerifyEmailRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    user = verify_email(db, user_id, body.code)
    return UserResponse(user=UserRead.model_validate(user))


@router.post("/resend-verification", response_model=ResendVerificationResponse)
async def resend(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    email_client: EmailClient = Depends(get_email_client),
    settings: Settings = Depends(get_settings),
):
    code = await resend_verification(db, user_id, tokens, email_client)
    return ResendVerificationResponse(verificationCode=None if settings.is_production else code)
