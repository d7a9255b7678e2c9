from __future__ import annotations

from fastapi import Header, HTTPException, status

from app.core.config import settings
from app.core.errors import Unauthorized


def check_api_key(x_api_key: str | None) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please provide a valid API key.",
        )


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    check_api_key(x_api_key)


def current_user_id(x_user_id: str | None = Header(default=None, alias="X-User-Id")) -> str:
    """Resolve the user forwarded by the session layer in front of this service."""
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise Unauthorized("Unauthorized")
    return user_id
