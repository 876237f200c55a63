"""Message endpoints."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.app.auth import get_current_user
from huddle.app.db import get_db
from huddle.app.errors import NotFoundError
from huddle.app.models.channel import Channel
from huddle.app.models.message import Message
from huddle.app.models.user import User
from huddle.app.schemas.message import MessageCreate, MessageResponse, SenderResponse
from huddle.app.services.access import require_access
from huddle.app.services.channel_manager import get_channel_by_id
from huddle.app.services.message_service import (
    append_message,
    list_messages_for_channel,
    list_messages_for_sender,
)

router = APIRouter(prefix="/messages", tags=["messages"])


def message_response(msg: Message) -> MessageResponse:
    return MessageResponse(
        id=msg.id,
        content=msg.content,
        created_at=msg.created_at,
        sender=SenderResponse(id=msg.sender.id, name=msg.sender.name),
        channel_id=msg.channel_id,
    )


async def _accessible_channel(db: AsyncSession, channel_id: uuid.UUID, user: User) -> Channel:
    # Not-found is decided before membership
    channel = await get_channel_by_id(db, str(channel_id))
    if not channel:
        raise NotFoundError("Channel not found")
    require_access(channel, user.id)
    return channel


@router.get("/channel/{channel_id}", response_model=list[MessageResponse])
async def get_messages(
    channel_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[MessageResponse]:
    channel = await _accessible_channel(db, channel_id, user)
    messages = await list_messages_for_channel(db, channel.id)
    return [message_response(m) for m in messages]


@router.post("/channel/{channel_id}", response_model=MessageResponse, status_code=201)
async def send_message(
    channel_id: uuid.UUID,
    data: MessageCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    channel = await _accessible_channel(db, channel_id, user)
    msg = await append_message(db, channel.id, user.id, data.content)
    return message_response(msg)


@router.get("/mine", response_model=list[MessageResponse])
async def get_my_messages(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[MessageResponse]:
    messages = await list_messages_for_sender(db, user.id)
    return [message_response(m) for m in messages]
