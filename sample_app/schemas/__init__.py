"""Pydantic schemas for API requests and responses."""

from sample_app.schemas.auth import FlashMessage, SessionCreate, SignInPage
from sample_app.schemas.home import HomePage
from sample_app.schemas.micropost import MicropostCreate, MicropostResponse
from sample_app.schemas.user import (
    UserCreate,
    UserDetailResponse,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "SessionCreate",
    "FlashMessage",
    "SignInPage",
    "HomePage",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserDetailResponse",
    "MicropostCreate",
    "MicropostResponse",
]
