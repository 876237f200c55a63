"""Channel and direct-message endpoints."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.app.auth import get_current_user
from huddle.app.db import get_db
from huddle.app.errors import NotFoundError
from huddle.app.models.channel import Channel
from huddle.app.models.user import User
from huddle.app.schemas.channel import ChannelCreate, ChannelResponse, MemberResponse
from huddle.app.services.access import require_access
from huddle.app.services.channel_manager import (
    create_channel,
    get_channel_by_id,
    list_channels_for_user,
)

router = APIRouter(prefix="/channels", tags=["channels"])


def channel_response(channel: Channel) -> ChannelResponse:
    # Members are exposed by id and name only, never by email
    return ChannelResponse(
        id=channel.id,
        name=channel.name,
        description=channel.description,
        channel_type=channel.type,
        members=[MemberResponse(id=m.user.id, name=m.user.name) for m in channel.members],
    )


@router.get("", response_model=list[ChannelResponse])
async def list_channels(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[ChannelResponse]:
    channels = await list_channels_for_user(db, user.id)
    return [channel_response(ch) for ch in channels]


@router.post("", response_model=ChannelResponse, status_code=201)
async def create_new_channel(
    data: ChannelCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> ChannelResponse:
    channel = await create_channel(
        db,
        data.type,
        user.id,
        name=data.name,
        description=data.description,
        other_user_id=data.other_user_id,
    )
    return channel_response(channel)


@router.get("/{channel_id}", response_model=ChannelResponse)
async def get_channel(
    channel_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> ChannelResponse:
    channel = await get_channel_by_id(db, str(channel_id))
    if not channel:
        raise NotFoundError("Channel not found")
    require_access(channel, user.id)
    return channel_response(channel)
