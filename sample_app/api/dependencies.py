"""FastAPI dependencies for sessions and access control."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from sample_app.database import get_db
from sample_app.models.user import User
from sample_app.services.session import SessionManager


def get_session(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> SessionManager:
    """Remember-me session for the current request."""
    return SessionManager(request, db)


def require_user(
    session: Annotated[SessionManager, Depends(get_session)],
) -> User:
    """Get the signed-in user, redirecting to the sign-in page otherwise."""
    if not session.is_signed_in:
        session.deny_access()
    return session.current_user


def require_admin(
    current_user: Annotated[User, Depends(require_user)],
) -> User:
    """Get the signed-in user if they are an admin."""
    if not current_user.admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user
