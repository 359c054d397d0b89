"""One-shot flash messages carried in a signed cookie."""

import logging

from fastapi import Request, Response
from jose import JWTError, jwt

from sample_app.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

FLASH_COOKIE_NAME = "flash"
FLASH_KINDS = ("notice", "success", "error")


def set_flash(response: Response, kind: str, message: str) -> None:
    """Attach a message to be shown on the next request."""
    if kind not in FLASH_KINDS:
        raise ValueError(f"Unknown flash kind: {kind}")
    token = jwt.encode(
        {"kind": kind, "message": message}, settings.secret_key, algorithm=settings.token_algorithm
    )
    response.set_cookie(
        FLASH_COOKIE_NAME,
        token,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


def pop_flash(request: Request, response: Response) -> dict[str, str] | None:
    """Read the pending flash message, if any, and clear it."""
    token = request.cookies.get(FLASH_COOKIE_NAME)
    if not token:
        return None
    response.delete_cookie(FLASH_COOKIE_NAME)
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.token_algorithm])
    except JWTError as e:
        logger.warning(f"Dropped unreadable flash cookie: {e}")
        return None
    if payload.get("kind") not in FLASH_KINDS:
        return None
    return {"kind": payload["kind"], "message": str(payload.get("message", ""))}
