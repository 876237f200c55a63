"""Tests for the channels API endpoints."""

import uuid
from unittest.mock import AsyncMock, patch

from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.app.auth import issue_token
from huddle.app.db import get_db
from huddle.app.main import app
from tests.conftest import auth_headers, create_channel, create_user


async def test_list_channels_requires_auth(client: AsyncClient):
    """GET /api/channels without a bearer token should 401."""
    resp = await client.get("/api/channels")
    assert resp.status_code == 401


async def test_list_channels_invalid_token(client: AsyncClient):
    resp = await client.get("/api/channels", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


async def test_list_channels_unregistered_user(client: AsyncClient):
    """A valid token with no user record behind it is not authenticated."""
    resp = await client.get(
        "/api/channels", headers={"Authorization": f"Bearer {issue_token('ghost')}"}
    )
    assert resp.status_code == 401


async def test_list_channels_empty(client: AsyncClient, db: AsyncSession):
    user = await create_user(db, name="alice")
    await db.commit()

    resp = await client.get("/api/channels", headers=auth_headers(user))
    assert resp.status_code == 200
    assert resp.json() == []


async def test_list_channels_only_memberships(client: AsyncClient, db: AsyncSession):
    """GET /api/channels should return exactly the caller's channels."""
    alice = await create_user(db, name="alice")
    bob = await create_user(db, name="bob")
    await create_channel(db, alice, name="general")
    await create_channel(db, bob, name="secret")
    await create_channel(db, alice, name=None, channel_type="dm", members=[alice, bob])
    await db.commit()

    resp = await client.get("/api/channels", headers=auth_headers(alice))
    assert resp.status_code == 200
    data = resp.json()
    assert sorted((ch["channelType"], ch["name"] or "") for ch in data) == [
        ("channel", "general"),
        ("dm", ""),
    ]


async def test_create_channel(client: AsyncClient, db: AsyncSession):
    """POST /api/channels should create a group channel with the creator as sole member."""
    alice = await create_user(db, name="alice")
    await db.commit()

    resp = await client.post(
        "/api/channels",
        json={"name": "dev-chat", "description": "Engineering talk"},
        headers=auth_headers(alice),
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["name"] == "dev-chat"
    assert data["description"] == "Engineering talk"
    assert data["channelType"] == "channel"
    assert data["members"] == [{"id": alice.id, "name": "alice"}]


async def test_create_channel_requires_name(client: AsyncClient, db: AsyncSession):
    alice = await create_user(db, name="alice")
    await db.commit()

    resp = await client.post("/api/channels", json={"type": "channel"}, headers=auth_headers(alice))
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "name"


async def test_create_channel_name_too_long(client: AsyncClient, db: AsyncSession):
    alice = await create_user(db, name="alice")
    await db.commit()

    resp = await client.post("/api/channels", json={"name": "x" * 51}, headers=auth_headers(alice))
    assert resp.status_code == 400

    resp = await client.post("/api/channels", json={"name": "x" * 50}, headers=auth_headers(alice))
    assert resp.status_code == 201


async def test_create_channel_description_too_long(client: AsyncClient, db: AsyncSession):
    alice = await create_user(db, name="alice")
    await db.commit()

    resp = await client.post(
        "/api/channels",
        json={"name": "ok", "description": "d" * 201},
        headers=auth_headers(alice),
    )
    assert resp.status_code == 400


async def test_create_channel_invalid_type(client: AsyncClient, db: AsyncSession):
    alice = await create_user(db, name="alice")
    await db.commit()

    resp = await client.post(
        "/api/channels", json={"name": "ok", "type": "group"}, headers=auth_headers(alice)
    )
    assert resp.status_code == 400


async def test_create_direct_message(client: AsyncClient, db: AsyncSession):
    """POST /api/channels with type=dm should include both parties and no name."""
    alice = await create_user(db, name="alice")
    bob = await create_user(db, name="bob")
    await db.commit()

    resp = await client.post(
        "/api/channels",
        json={"type": "dm", "otherUserId": bob.id, "name": "ignored"},
        headers=auth_headers(alice),
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["channelType"] == "dm"
    assert data["name"] is None
    assert data["description"] is None
    assert {m["id"] for m in data["members"]} == {alice.id, bob.id}
    # Members never carry email addresses
    assert all(set(m) == {"id", "name"} for m in data["members"])


async def test_create_direct_message_requires_other_user(client: AsyncClient, db: AsyncSession):
    alice = await create_user(db, name="alice")
    await db.commit()

    resp = await client.post("/api/channels", json={"type": "dm"}, headers=auth_headers(alice))
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "otherUserId"


async def test_create_direct_message_with_self(client: AsyncClient, db: AsyncSession):
    alice = await create_user(db, name="alice")
    await db.commit()

    resp = await client.post(
        "/api/channels", json={"type": "dm", "otherUserId": alice.id}, headers=auth_headers(alice)
    )
    assert resp.status_code == 400


async def test_create_direct_message_unknown_user(client: AsyncClient, db: AsyncSession):
    alice = await create_user(db, name="alice")
    await db.commit()

    resp = await client.post(
        "/api/channels",
        json={"type": "dm", "otherUserId": str(uuid.uuid4())},
        headers=auth_headers(alice),
    )
    assert resp.status_code == 400


async def test_create_direct_message_twice_creates_two(client: AsyncClient, db: AsyncSession):
    """Without deduplication, each request opens a new DM thread."""
    alice = await create_user(db, name="alice")
    bob = await create_user(db, name="bob")
    await db.commit()

    body = {"type": "dm", "otherUserId": bob.id}
    first = await client.post("/api/channels", json=body, headers=auth_headers(alice))
    second = await client.post("/api/channels", json=body, headers=auth_headers(alice))
    assert first.json()["id"] != second.json()["id"]


async def test_get_channel(client: AsyncClient, db: AsyncSession):
    alice = await create_user(db, name="alice")
    channel = await create_channel(db, alice, name="test-get")
    await db.commit()

    resp = await client.get(f"/api/channels/{channel.id}", headers=auth_headers(alice))
    assert resp.status_code == 200
    assert resp.json()["name"] == "test-get"


async def test_get_channel_not_found(client: AsyncClient, db: AsyncSession):
    alice = await create_user(db, name="alice")
    await db.commit()

    resp = await client.get(f"/api/channels/{uuid.uuid4()}", headers=auth_headers(alice))
    assert resp.status_code == 404


async def test_get_channel_malformed_id(client: AsyncClient, db: AsyncSession):
    alice = await create_user(db, name="alice")
    await db.commit()

    resp = await client.get("/api/channels/nonexistent-id", headers=auth_headers(alice))
    assert resp.status_code == 400


async def test_get_channel_not_a_member(client: AsyncClient, db: AsyncSession):
    alice = await create_user(db, name="alice")
    bob = await create_user(db, name="bob")
    channel = await create_channel(db, alice, name="private")
    await db.commit()

    resp = await client.get(f"/api/channels/{channel.id}", headers=auth_headers(bob))
    assert resp.status_code == 403


async def test_store_failure_returns_generic_500(session_factory, db: AsyncSession):
    """Unexpected store errors surface as a bare 500 with no internal detail."""
    alice = await create_user(db, name="alice")
    await db.commit()

    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    try:
        with patch(
            "huddle.app.api.channels.list_channels_for_user",
            new_callable=AsyncMock,
            side_effect=OperationalError("SELECT 1", {}, Exception("disk I/O error")),
        ):
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                resp = await ac.get("/api/channels", headers=auth_headers(alice))
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error"}
