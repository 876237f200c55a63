"""Shared fixtures and factory helpers.

Each test gets its own file-backed SQLite database. The ``client`` fixture
routes the app's ``get_db`` dependency to that database, and ``db`` is a
separate session on it for arranging data and inspecting results.
"""

import uuid
from collections.abc import AsyncGenerator
from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import huddle.app.models  # noqa: F401 — ensure models are registered
from huddle.app.auth import issue_token
from huddle.app.db import Base, get_db, to_timestamp
from huddle.app.main import app
from huddle.app.models.ai_chat import AiChatRecord
from huddle.app.models.channel import Channel
from huddle.app.models.channel_member import ChannelMember
from huddle.app.models.message import Message
from huddle.app.models.user import User


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    async def _get_test_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Factory helpers
# ---------------------------------------------------------------------------


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_token(user.auth_id)}"}


async def create_user(
    db: AsyncSession,
    name: str = "alice",
    email: str | None = None,
    auth_id: str | None = None,
) -> User:
    user = User(
        id=str(uuid.uuid4()),
        auth_id=auth_id or f"auth-{uuid.uuid4()}",
        name=name,
        email=email or f"{name}-{uuid.uuid4().hex[:8]}@example.com",
        created_at=to_timestamp(),
    )
    db.add(user)
    await db.flush()
    return user


async def create_channel(
    db: AsyncSession,
    creator: User,
    name: str | None = "general",
    description: str | None = None,
    channel_type: str = "channel",
    members: list[User] | None = None,
) -> Channel:
    now = to_timestamp()
    channel = Channel(
        id=str(uuid.uuid4()),
        type=channel_type,
        name=name,
        description=description,
        created_by=creator.id,
        created_at=now,
    )
    db.add(channel)
    await db.flush()
    for member in members if members is not None else [creator]:
        db.add(ChannelMember(channel_id=channel.id, user_id=member.id, joined_at=now))
    await db.flush()
    return channel


async def create_message(
    db: AsyncSession,
    channel_id: str,
    sender_id: str,
    content: str = "Hello",
    created_at: str | None = None,
) -> Message:
    msg = Message(
        id=str(uuid.uuid4()),
        channel_id=channel_id,
        sender_id=sender_id,
        content=content,
        created_at=created_at or to_timestamp(),
    )
    db.add(msg)
    await db.flush()
    return msg


async def create_ai_record(
    db: AsyncSession,
    user_id: str,
    at: datetime,
    message: str = "question",
    response: str = "answer",
) -> AiChatRecord:
    record = AiChatRecord(
        id=str(uuid.uuid4()),
        user_id=user_id,
        message=message,
        response=response,
        created_at=to_timestamp(at),
    )
    db.add(record)
    await db.flush()
    return record
