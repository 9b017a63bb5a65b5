"""One-click unsubscribe link target. Renders HTML, not JSON."""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from vininfo.application.services.email_templates import render_unsubscribe_page
from vininfo.application.services.preferences_service import unsubscribe, unsubscribe_label
from vininfo.application.services.token_service import TokenService
from vininfo.core.exceptions import AuthError, NotFoundError
from vininfo.infrastructure.database import get_db
from vininfo.interfaces.deps import get_token_service

router = APIRouter(prefix="/api/email", tags=["Email"])


def _error_page(message: str) -> HTMLResponse:
    return HTMLResponse(render_unsubscribe_page("Chyba", message, success=False), status_code=400)


@router.get("/unsubscribe", response_class=HTMLResponse)
def unsubscribe_link(
    token: Optional[str] = None,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    if not token:
        return _error_page("Chybí token pro odhlášení.")
    try:
        claims = unsubscribe(db, tokens, token)
    except (AuthError, NotFoundError):
        return _error_page("Neplatný nebo expirovaný odkaz pro odhlášení.")

    message = f"Byli jste úspěšně odhlášeni z odběru {unsubscribe_label(claims.preference)}."
    return HTMLResponse(render_unsubscribe_page("Odhlášení úspěšné", message, success=True))
