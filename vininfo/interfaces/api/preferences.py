"""Email preferences API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vininfo.application.services.preferences_service import update_preferences
from vininfo.domain.models.user import User
from vininfo.domain.schemas.preferences import PreferencesRead, PreferencesUpdate
from vininfo.infrastructure.database import get_db
from vininfo.interfaces.api.deps import get_current_user

router = APIRouter(prefix="/api/client/preferences", tags=["Preferences"])


@router.get("")
def get_preferences(user: User = Depends(get_current_user)):
    return {"preferences": PreferencesRead.model_validate(user)}


@router.patch("")
def patch_preferences(
    body: PreferencesUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"preferences": PreferencesRead.model_validate(update_preferences(db, user, body))}
