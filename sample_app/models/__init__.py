"""SQLAlchemy models."""

from sample_app.models.micropost import Micropost
from sample_app.models.user import User

__all__ = [
    "User",
    "Micropost",
]
