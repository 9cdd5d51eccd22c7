"""
Event token gate for the Media Service.
A single shared token (EVENT_TOKEN) protects the gallery; guests present it
as a header, a bearer token, or the cookie set by /event.
"""

import secrets
from typing import Optional

from fastapi import HTTPException, Request, status

from app.core.config import settings

EVENT_TOKEN_HEADER = "x-event-token"
EVENT_TOKEN_COOKIE = "event_token"


def get_event_token_from_request(request: Request) -> Optional[str]:
    """
    Extract the event token supplied with a request.

    Lookup order: X-Event-Token header, Authorization: Bearer <token>,
    then the event_token cookie. Blank values are ignored.

    Args:
        request: Incoming request

    Returns:
        The supplied token, or None if the request carries none
    """
    header_token = (request.headers.get(EVENT_TOKEN_HEADER) or "").strip()
    if header_token:
        return header_token

    authorization = request.headers.get("authorization") or ""
    if authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
        if token:
            return token

    cookie_token = (request.cookies.get(EVENT_TOKEN_COOKIE) or "").strip()
    if cookie_token:
        return cookie_token

    return None


def is_token_required() -> bool:
    """True when an event token is configured."""
    return len(settings.event_token) > 0


def is_token_matching(token: Optional[str]) -> bool:
    """Constant-time comparison against the configured event token."""
    if not token:
        return False
    return secrets.compare_digest(token.encode(), settings.event_token.encode())


def is_token_valid(request: Request) -> bool:
    """
    Check whether a request satisfies the event token gate.

    Always True when no token is configured.
    """
    if not is_token_required():
        return True
    return is_token_matching(get_event_token_from_request(request))


async def require_event_token(request: Request) -> None:
    """
    Dependency guarding gallery endpoints.

    Raises:
        HTTPException: 401 if a token is required and missing or invalid
    """
    if is_token_required() and not is_token_valid(request):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="A valid event token is required to view media.",
        )
