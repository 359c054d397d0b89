"""Home and sign-in pages."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from sample_app.api.dependencies import get_session
from sample_app.database import get_db
from sample_app.schemas.auth import SignInPage
from sample_app.schemas.home import HomePage
from sample_app.schemas.micropost import MicropostResponse
from sample_app.schemas.user import UserResponse
from sample_app.services.flash import pop_flash
from sample_app.services.microposts import feed
from sample_app.services.session import SessionManager

router = APIRouter(tags=["pages"])


@router.get("/", response_model=HomePage)
async def home(
    request: Request,
    response: Response,
    session: Annotated[SessionManager, Depends(get_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Home page with the signed-in user's feed."""
    flash = pop_flash(request, response)
    user = session.current_user
    if user is None:
        return HomePage(flash=flash)

    return HomePage(
        current_user=UserResponse.model_validate(user),
        feed=[MicropostResponse.model_validate(m) for m in feed(db, user)],
        flash=flash,
    )


@router.get("/signin", response_model=SignInPage)
async def sign_in_page(request: Request, response: Response):
    """Sign-in entry point, showing any pending notice."""
    return SignInPage(flash=pop_flash(request, response))
