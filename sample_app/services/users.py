"""User store: validation, persistence and password checks."""

import logging
import re
from typing import NamedTuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sample_app.models.user import User
from sample_app.services.passwords import encrypt, make_salt, matches

logger = logging.getLogger(__name__)

EMAIL_REGEX = re.compile(r"\A[\w+\-.]+@[a-z\d\-.]+\.[a-z]+\Z", re.IGNORECASE | re.ASCII)
NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 40

BLANK = "can't be blank"
TAKEN = "has already been taken"


class FieldError(NamedTuple):
    """A single failed validation rule."""

    field: str
    message: str


class ValidationFailed(Exception):
    """Raised when a record is rejected before it is persisted."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field} {e.message}" for e in errors))

    def as_dict(self) -> list[dict[str, str]]:
        """Errors in a JSON-friendly shape."""
        return [e._asdict() for e in self.errors]


def email_taken(db: Session, email: str, exclude: User | None = None) -> bool:
    """Check whether another user already has this email, ignoring case."""
    query = db.query(User.id).filter(func.lower(User.email) == func.lower(email))
    if exclude is not None and exclude.id is not None:
        query = query.filter(User.id != exclude.id)
    return query.first() is not None


def validate_user(
    db: Session,
    name: str | None,
    email: str | None,
    password: str | None,
    password_confirmation: str | None,
    *,
    user: User | None = None,
) -> list[FieldError]:
    """Validate user attributes and return every failing rule.

    Password rules apply on creation (``user`` is None) and whenever a new
    password is submitted for an existing user.
    """
    errors: list[FieldError] = []

    if not name or not name.strip():
        errors.append(FieldError("name", BLANK))
    elif len(name) > NAME_MAX_LENGTH:
        errors.append(
            FieldError("name", f"is too long (maximum is {NAME_MAX_LENGTH} characters)")
        )

    if not email or not email.strip():
        errors.append(FieldError("email", BLANK))
    elif not EMAIL_REGEX.match(email):
        errors.append(FieldError("email", "is invalid"))
    elif email_taken(db, email, exclude=user):
        errors.append(FieldError("email", TAKEN))

    if user is None or password is not None:
        if not password:
            errors.append(FieldError("password", BLANK))
        else:
            if password != password_confirmation:
                errors.append(FieldError("password", "doesn't match confirmation"))
            if len(password) < PASSWORD_MIN_LENGTH:
                errors.append(
                    FieldError(
                        "password", f"is too short (minimum is {PASSWORD_MIN_LENGTH} characters)"
                    )
                )
            elif len(password) > PASSWORD_MAX_LENGTH:
                errors.append(
                    FieldError(
                        "password", f"is too long (maximum is {PASSWORD_MAX_LENGTH} characters)"
                    )
                )

    return errors


def _commit_user(db: Session, user: User) -> User:
    """Commit a user, reporting a unique email violation as a validation error."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected user write for {user.email!r}: {e.orig}")
        raise ValidationFailed([FieldError("email", TAKEN)]) from e
    db.refresh(user)
    return user


def create_user(
    db: Session, name: str, email: str, password: str, password_confirmation: str
) -> User:
    """Create a new user or raise ValidationFailed without persisting anything."""
    errors = validate_user(db, name, email, password, password_confirmation)
    if errors:
        raise ValidationFailed(errors)

    salt = make_salt(password)
    user = User(
        name=name,
        email=email,
        salt=salt,
        encrypted_password=encrypt(salt, password),
    )
    db.add(user)
    _commit_user(db, user)
    logger.info(f"Created user {user.id} <{user.email}>")
    return user


def update_user(
    db: Session,
    user: User,
    name: str | None = None,
    email: str | None = None,
    password: str | None = None,
    password_confirmation: str | None = None,
) -> User:
    """Update a user's attributes; a new password is digested with the existing salt."""
    new_name = user.name if name is None else name
    new_email = user.email if email is None else email
    errors = validate_user(db, new_name, new_email, password, password_confirmation, user=user)
    if errors:
        raise ValidationFailed(errors)

    user.name = new_name
    user.email = new_email
    if password is not None:
        user.encrypted_password = encrypt(user.salt, password)
    return _commit_user(db, user)


def toggle_admin(db: Session, user: User) -> User:
    """Flip the admin flag."""
    user.admin = not user.admin
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user: User) -> None:
    """Delete a user together with every micropost it owns."""
    user_id = user.id
    db.delete(user)
    db.commit()
    logger.info(f"Deleted user {user_id}")


def has_password(user: User, submitted_password: str) -> bool:
    """Check a submitted password against the user's stored digest."""
    return matches(user.salt, submitted_password, user.encrypted_password)


def get_user(db: Session, user_id: int | None) -> User | None:
    """Get a user by id."""
    if user_id is None:
        return None
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str | None) -> User | None:
    """Get a user by email, ignoring case."""
    if not email:
        return None
    return db.query(User).filter(func.lower(User.email) == func.lower(email)).first()


def list_users(db: Session) -> list[User]:
    """Get all users in creation order."""
    return db.query(User).order_by(User.id).all()
