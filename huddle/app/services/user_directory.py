"""User directory: identity records keyed by the identity provider's subject id."""

import logging
import uuid

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.app.db import to_timestamp
from huddle.app.errors import ConflictError
from huddle.app.models.user import User

logger = logging.getLogger(__name__)


async def get_user_by_id(db: AsyncSession, user_id: str) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_auth_id(db: AsyncSession, auth_id: str) -> User | None:
    result = await db.execute(select(User).where(User.auth_id == auth_id))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, auth_id: str, email: str, name: str) -> User:
    """Register the user record for an identity-provider account.

    Raises ConflictError when the account or the email is already registered.
    """
    existing = await db.execute(
        select(User.id).where(or_(User.auth_id == auth_id, User.email == email))
    )
    if existing.first() is not None:
        raise ConflictError("This email address is already registered")

    user = User(
        id=str(uuid.uuid4()),
        auth_id=auth_id,
        name=name,
        email=email,
        created_at=to_timestamp(),
    )
    db.add(user)
    await db.flush()
    logger.info("Registered user %s (%s)", user.id, name)
    return user


async def list_users(db: AsyncSession, exclude_id: str | None = None) -> list[User]:
    query = select(User).order_by(User.name)
    if exclude_id:
        query = query.where(User.id != exclude_id)
    result = await db.execute(query)
    return list(result.scalars().all())
