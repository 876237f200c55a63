"""Message store.

Messages are append-only. Callers run the access gate before appending or
listing; this module does not look at membership.
"""

import logging
import uuid

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from huddle.app.config import MESSAGE_MAX_LENGTH
from huddle.app.db import to_timestamp
from huddle.app.errors import ValidationError
from huddle.app.models.message import Message

logger = logging.getLogger(__name__)


async def append_message(
    db: AsyncSession, channel_id: str, sender_id: str, content: str
) -> Message:
    """Store a message. Content is kept as given (no trimming)."""
    if not 1 <= len(content) <= MESSAGE_MAX_LENGTH:
        raise ValidationError.for_field(
            "content", f"Message must be between 1 and {MESSAGE_MAX_LENGTH} characters"
        )

    msg = Message(
        id=str(uuid.uuid4()),
        channel_id=channel_id,
        sender_id=sender_id,
        content=content,
        created_at=to_timestamp(),
    )
    db.add(msg)
    await db.flush()
    await db.refresh(msg, attribute_names=["sender"])

    logger.info("Message %s appended to channel %s by %s", msg.id, channel_id, sender_id)
    return msg


async def list_messages_for_channel(db: AsyncSession, channel_id: str) -> list[Message]:
    """Channel history, oldest first."""
    result = await db.execute(
        select(Message)
        .options(selectinload(Message.sender))
        .where(Message.channel_id == channel_id)
        .order_by(Message.created_at, Message.seq)
    )
    return list(result.scalars().all())


async def list_messages_for_sender(db: AsyncSession, sender_id: str) -> list[Message]:
    """Everything a user has sent, newest first."""
    result = await db.execute(
        select(Message)
        .options(selectinload(Message.sender))
        .where(Message.sender_id == sender_id)
        .order_by(desc(Message.created_at), desc(Message.seq))
    )
    return list(result.scalars().all())
