"""Session schemas."""

from pydantic import BaseModel, Field


class SessionCreate(BaseModel):
    """Sign-in request."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=255)


class FlashMessage(BaseModel):
    """A one-shot message for the client."""

    kind: str
    message: str


class SignInPage(BaseModel):
    """Sign-in entry point."""

    title: str = "Sign in"
    flash: FlashMessage | None = None
