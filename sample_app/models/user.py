"""User model."""

from sqlalchemy import Boolean, Column, Index, Integer, String, false, func
from sqlalchemy.orm import relationship

from sample_app.database import Base
from sample_app.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and micropost ownership.

    The plain-text password is never stored. ``salt`` is written once at
    creation and ``encrypted_password`` is the digest of ``salt--password``.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False)
    encrypted_password = Column(String(255), nullable=False)
    salt = Column(String(255), nullable=False)
    admin = Column(Boolean, nullable=False, default=False, server_default=false())

    # Relationships
    microposts = relationship(
        "Micropost",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[Micropost.created_at.desc(), Micropost.id.desc()]",
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"


# Case-insensitive uniqueness lives in the datastore, not only in validation
Index("uq_users_email_lower", func.lower(User.email), unique=True)
