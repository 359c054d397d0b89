"""Micropost schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class MicropostCreate(BaseModel):
    """Create a micropost."""

    content: str = ""


class MicropostResponse(BaseModel):
    """Micropost response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    user_id: int
    created_at: datetime
