"""Micropost API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from sample_app.api.dependencies import require_user
from sample_app.database import get_db
from sample_app.models.user import User
from sample_app.schemas.micropost import MicropostCreate
from sample_app.services.flash import set_flash
from sample_app.services.microposts import create_micropost, delete_micropost, get_micropost

router = APIRouter(prefix="/microposts", tags=["microposts"])


@router.post("", status_code=status.HTTP_303_SEE_OTHER)
async def create(
    micropost_data: MicropostCreate,
    current_user: Annotated[User, Depends(require_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Post a micropost as the signed-in user."""
    create_micropost(db, current_user, micropost_data.content)

    redirect = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    set_flash(redirect, "success", "Micropost created!")
    return redirect


@router.delete("/{micropost_id}", status_code=status.HTTP_204_NO_CONTENT)
async def destroy(
    micropost_id: int,
    current_user: Annotated[User, Depends(require_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete one of the signed-in user's microposts."""
    micropost = get_micropost(db, micropost_id)
    if micropost is None or micropost.user_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Micropost not found")

    delete_micropost(db, micropost)
