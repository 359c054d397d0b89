"""Request-scoped remember-me session.

A ``SessionManager`` lives for a single request. The current user is
resolved from the ``remember_token`` cookie at most once; ``sign_in`` and
``sign_out`` set it directly without reading the cookie again.
"""

import logging
from datetime import timedelta

from fastapi import Request, Response
from sqlalchemy.orm import Session

from sample_app.config import get_settings
from sample_app.models.user import User
from sample_app.services.auth import (
    authenticate_with_salt,
    create_remember_token,
    decode_remember_token,
)

logger = logging.getLogger(__name__)

settings = get_settings()

SIGN_IN_PATH = "/signin"
SIGN_IN_NOTICE = "Please sign in to access this page."

_UNRESOLVED = object()


class SignInRequired(Exception):
    """Raised by a guard to send the client to the sign-in page."""

    def __init__(self, location: str = SIGN_IN_PATH, notice: str = SIGN_IN_NOTICE):
        self.location = location
        self.notice = notice
        super().__init__(notice)


class SessionManager:
    """Remember-me session for one request."""

    def __init__(self, request: Request, db: Session):
        self.request = request
        self.db = db
        self._current_user: User | None | object = _UNRESOLVED

    @property
    def cookie_name(self) -> str:
        return settings.remember_cookie_name

    def sign_in(self, response: Response, user: User) -> None:
        """Write the remember token and make ``user`` current."""
        token = create_remember_token(user.id, user.salt)
        response.set_cookie(
            self.cookie_name,
            token,
            max_age=int(timedelta(days=settings.remember_token_days).total_seconds()),
            httponly=True,
            samesite="lax",
            secure=settings.cookie_secure,
        )
        self._current_user = user
        logger.info(f"User {user.id} signed in")

    def sign_out(self, response: Response) -> None:
        """Delete the remember token and clear the current user."""
        response.delete_cookie(self.cookie_name)
        if isinstance(self._current_user, User):
            logger.info(f"User {self._current_user.id} signed out")
        self._current_user = None

    @property
    def current_user(self) -> User | None:
        """The signed-in user, looked up once per request."""
        if self._current_user is _UNRESOLVED:
            self._current_user = self._user_from_remember_token()
        return self._current_user  # type: ignore[return-value]

    @property
    def is_signed_in(self) -> bool:
        return self.current_user is not None

    def is_current_user(self, user: User | None) -> bool:
        current = self.current_user
        return current is not None and user is not None and current.id == user.id

    def deny_access(self) -> None:
        """Stop the request and redirect to the sign-in page."""
        raise SignInRequired()

    def _user_from_remember_token(self) -> User | None:
        user_id, salt = decode_remember_token(self.request.cookies.get(self.cookie_name))
        return authenticate_with_salt(self.db, user_id, salt)
