"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from sample_app.api.dependencies import get_session, require_admin, require_user
from sample_app.database import get_db
from sample_app.models.user import User
from sample_app.schemas.user import UserCreate, UserDetailResponse, UserResponse, UserUpdate
from sample_app.services import users as user_store
from sample_app.services.session import SessionManager

router = APIRouter(prefix="/users", tags=["users"])


def get_user_or_404(db: Session, user_id: int) -> User:
    """Get a user or fail with 404."""
    user = user_store.get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    user_data: UserCreate,
    response: Response,
    session: Annotated[SessionManager, Depends(get_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user and sign them in."""
    user = user_store.create_user(
        db,
        user_data.name,
        user_data.email,
        user_data.password,
        user_data.password_confirmation,
    )
    session.sign_in(response, user)
    return user


@router.get("", response_model=list[UserResponse])
async def get_users(
    current_user: Annotated[User, Depends(require_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """List all users."""
    return user_store.list_users(db)


@router.get("/{user_id}", response_model=UserDetailResponse)
async def get_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Get a user and their microposts."""
    return get_user_or_404(db, user_id)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    current_user: Annotated[User, Depends(require_user)],
    session: Annotated[SessionManager, Depends(get_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the signed-in user's own profile."""
    user = get_user_or_404(db, user_id)
    if not session.is_current_user(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only edit your own profile",
        )

    return user_store.update_user(
        db,
        user,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        password_confirmation=user_data.password_confirmation,
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    current_user: Annotated[User, Depends(require_admin)],
    session: Annotated[SessionManager, Depends(get_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a user and their microposts (admin only)."""
    user = get_user_or_404(db, user_id)
    if session.is_current_user(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admins cannot delete themselves",
        )

    user_store.delete_user(db, user)
