"""Micropost model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from sample_app.database import Base
from sample_app.models.mixins import TimestampMixin

MAX_CONTENT_LENGTH = 140


class Micropost(Base, TimestampMixin):
    """A short post owned by exactly one user."""

    __tablename__ = "microposts"

    id = Column(Integer, primary_key=True, index=True)
    content = Column(String(MAX_CONTENT_LENGTH), nullable=False)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    user = relationship("User", back_populates="microposts")
