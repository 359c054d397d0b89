"""Micropost creation, deletion and feeds."""

import logging

from sqlalchemy.orm import Session

from sample_app.models.micropost import MAX_CONTENT_LENGTH, Micropost
from sample_app.models.user import User
from sample_app.services.users import BLANK, FieldError, ValidationFailed

logger = logging.getLogger(__name__)


def validate_micropost(content: str | None) -> list[FieldError]:
    """Validate micropost content."""
    if not content or not content.strip():
        return [FieldError("content", BLANK)]
    if len(content) > MAX_CONTENT_LENGTH:
        return [
            FieldError("content", f"is too long (maximum is {MAX_CONTENT_LENGTH} characters)")
        ]
    return []


def create_micropost(db: Session, user: User, content: str) -> Micropost:
    """Create a micropost owned by ``user``."""
    errors = validate_micropost(content)
    if errors:
        raise ValidationFailed(errors)

    micropost = Micropost(content=content, user_id=user.id)
    db.add(micropost)
    db.commit()
    db.refresh(micropost)
    logger.info(f"User {user.id} created micropost {micropost.id}")
    return micropost


def get_micropost(db: Session, micropost_id: int) -> Micropost | None:
    """Get a micropost by id."""
    return db.query(Micropost).filter(Micropost.id == micropost_id).first()


def delete_micropost(db: Session, micropost: Micropost) -> None:
    """Delete a micropost."""
    db.delete(micropost)
    db.commit()


def feed(db: Session, user: User) -> list[Micropost]:
    """A user's status feed: their own microposts, newest first."""
    return (
        db.query(Micropost)
        .filter(Micropost.user_id == user.id)
        .order_by(Micropost.created_at.desc(), Micropost.id.desc())
        .all()
    )
