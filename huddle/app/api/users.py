"""User signup & profile endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.app.auth import get_auth_id, get_current_user
from huddle.app.db import get_db
from huddle.app.errors import NotFoundError
from huddle.app.models.user import User
from huddle.app.schemas.user import UserResponse, UserSignup, UserSummary
from huddle.app.services.user_directory import create_user, get_user_by_auth_id, list_users

router = APIRouter(tags=["users"])


@router.get("/user/me", response_model=UserResponse)
async def get_me(
    auth_id: str = Depends(get_auth_id),
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    user = await get_user_by_auth_id(db, auth_id)
    if not user:
        raise NotFoundError("User not found")
    return UserResponse(id=user.id, name=user.name, email=user.email)


@router.post("/user/signup", response_model=UserResponse, status_code=201)
async def signup(
    data: UserSignup,
    auth_id: str = Depends(get_auth_id),
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Register the user record for the identity-provider account behind the token."""
    user = await create_user(db, auth_id, data.email, data.name)
    return UserResponse(id=user.id, name=user.name, email=user.email)


@router.get("/users", response_model=list[UserSummary])
async def get_users(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[UserSummary]:
    """Other users the caller can start a direct message with."""
    others = await list_users(db, exclude_id=user.id)
    return [UserSummary(id=u.id, name=u.name) for u in others]
