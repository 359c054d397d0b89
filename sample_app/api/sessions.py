"""Sign in and sign out."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from sample_app.api.dependencies import get_session
from sample_app.database import get_db
from sample_app.schemas.auth import SessionCreate
from sample_app.services.auth import authenticate_user
from sample_app.services.flash import set_flash
from sample_app.services.session import SIGN_IN_PATH, SessionManager

router = APIRouter(prefix="/sessions", tags=["sessions"])

INVALID_CREDENTIALS = "Invalid email/password combination."


@router.post("", status_code=status.HTTP_303_SEE_OTHER)
async def sign_in(
    credentials: SessionCreate,
    session: Annotated[SessionManager, Depends(get_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Sign in with email and password, then go to the user's page."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if user is None:
        redirect = RedirectResponse(SIGN_IN_PATH, status_code=status.HTTP_303_SEE_OTHER)
        set_flash(redirect, "error", INVALID_CREDENTIALS)
        return redirect

    redirect = RedirectResponse(f"/users/{user.id}", status_code=status.HTTP_303_SEE_OTHER)
    session.sign_in(redirect, user)
    return redirect


@router.delete("", status_code=status.HTTP_303_SEE_OTHER)
async def sign_out(
    session: Annotated[SessionManager, Depends(get_session)],
):
    """Sign out and go home."""
    redirect = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    session.sign_out(redirect)
    return redirect
