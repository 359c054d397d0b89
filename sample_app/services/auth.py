"""Authentication by password or by remember-token salt, and token signing."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from sample_app.config import get_settings
from sample_app.models.user import User
from sample_app.services.users import get_user, get_user_by_email, has_password

logger = logging.getLogger(__name__)

settings = get_settings()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password.

    Unknown emails and wrong passwords both give None.
    """
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not has_password(user, password):
        return None
    return user


def authenticate_with_salt(db: Session, user_id: int | None, salt: str | None) -> User | None:
    """Authenticate a user by id and the salt carried in a remember token."""
    user = get_user(db, user_id)
    if not user or salt is None:
        return None
    if user.salt != salt:
        return None
    return user


def create_remember_token(user_id: int, salt: str) -> str:
    """Sign the (id, salt) pair of a remember token."""
    expire = datetime.now(UTC) + timedelta(days=settings.remember_token_days)
    to_encode = {
        "sub": str(user_id),
        "salt": salt,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.token_algorithm)


def decode_remember_token(token: str | None) -> tuple[int | None, str | None]:
    """Verify a remember token and return its (id, salt) pair.

    Missing, tampered or malformed tokens give (None, None).
    """
    if not token:
        return None, None
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.token_algorithm])
    except JWTError as e:
        logger.warning(f"Rejected remember token: {e}")
        return None, None

    sub = payload.get("sub")
    salt = payload.get("salt")
    if sub is None or not isinstance(salt, str):
        return None, None
    try:
        return int(sub), salt
    except (TypeError, ValueError):
        return None, None
