"""
Event access endpoint.
Exchanges the token from an invitation link (/event?token=...) for the
event_token cookie, then sends the guest to the gallery.
"""

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import RedirectResponse

from app.core.auth import EVENT_TOKEN_COOKIE, is_token_matching, is_token_required
from app.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["event"])


@router.get("/event")
async def enter_event(token: str = ""):
    """
    Validate an invitation token and set the access cookie.

    When no event token is configured the gallery is open and the guest is
    redirected without a cookie.

    Args:
        token: Event token from the invitation link

    Returns:
        Redirect to the gallery root
    """
    token = token.strip()

    if is_token_required() and not is_token_matching(token):
        logger.warning("[EVENT] Rejected invalid or missing event token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing event token.",
        )

    response = RedirectResponse(url="/", status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    if is_token_required():
        response.set_cookie(
            key=EVENT_TOKEN_COOKIE,
            value=settings.event_token,
            max_age=settings.EVENT_TOKEN_COOKIE_MAX_AGE,
            path="/",
            secure=settings.EVENT_TOKEN_COOKIE_SECURE,
            httponly=True,
            samesite="lax",
        )
    response.headers["Cache-Control"] = "no-store"
    return response
