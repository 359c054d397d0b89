"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from sample_app.schemas.micropost import MicropostResponse


class UserCreate(BaseModel):
    """Sign-up request.

    Field rules are checked by the user store so every failure is reported
    together as field errors.
    """

    name: str = ""
    email: str = ""
    password: str = ""
    password_confirmation: str = ""


class UserUpdate(BaseModel):
    """Update a user."""

    name: str | None = None
    email: str | None = None
    password: str | None = None
    password_confirmation: str | None = None


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    admin: bool
    created_at: datetime


class UserDetailResponse(UserResponse):
    """User with their microposts, newest first."""

    microposts: list[MicropostResponse] = Field(default_factory=list)
