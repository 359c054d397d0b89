"""Home page schema."""

from pydantic import BaseModel, Field

from sample_app.schemas.auth import FlashMessage
from sample_app.schemas.micropost import MicropostResponse
from sample_app.schemas.user import UserResponse


class HomePage(BaseModel):
    """Home page: the signed-in user's feed, if any."""

    title: str = "Home"
    current_user: UserResponse | None = None
    feed: list[MicropostResponse] = Field(default_factory=list)
    flash: FlashMessage | None = None
