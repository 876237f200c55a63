"""Channel and membership store.

Membership is fixed at creation time: a group channel starts with its
creator as the only member, a direct message with exactly its two parties.
"""

import logging
import uuid

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from huddle.app.config import settings
from huddle.app.db import to_timestamp
from huddle.app.errors import ValidationError
from huddle.app.models.channel import DIRECT_MESSAGE, GROUP_CHANNEL, Channel
from huddle.app.models.channel_member import ChannelMember
from huddle.app.services.user_directory import get_user_by_id

logger = logging.getLogger(__name__)

_WITH_MEMBERS = selectinload(Channel.members).selectinload(ChannelMember.user)


async def create_channel(
    db: AsyncSession,
    kind: str,
    creator_id: str,
    *,
    name: str | None = None,
    description: str | None = None,
    other_user_id: str | None = None,
) -> Channel:
    """Create a group channel or a direct message and its memberships.

    Raises ValidationError when the field required by ``kind`` is missing or
    invalid.
    """
    if kind == GROUP_CHANNEL:
        if not name:
            raise ValidationError.for_field("name", "A channel name is required")
        member_ids = [creator_id]
    elif kind == DIRECT_MESSAGE:
        if not other_user_id:
            raise ValidationError.for_field(
                "otherUserId", "The other user is required to start a direct message"
            )
        if other_user_id == creator_id:
            raise ValidationError.for_field(
                "otherUserId", "Cannot start a direct message with yourself"
            )
        if await get_user_by_id(db, other_user_id) is None:
            raise ValidationError.for_field("otherUserId", "User does not exist")

        if settings.dedupe_direct_messages:
            existing = await find_direct_message(db, creator_id, other_user_id)
            if existing is not None:
                return existing

        # Direct messages never carry a name or description
        name = None
        description = None
        member_ids = [creator_id, other_user_id]
    else:
        raise ValidationError.for_field("type", f"Unknown channel type: {kind}")

    now = to_timestamp()
    channel = Channel(
        id=str(uuid.uuid4()),
        type=kind,
        name=name,
        description=description,
        created_by=creator_id,
        created_at=now,
    )
    db.add(channel)
    await db.flush()

    for user_id in member_ids:
        db.add(ChannelMember(channel_id=channel.id, user_id=user_id, joined_at=now))
    await db.flush()

    logger.info("Created %s %s with %d member(s)", kind, channel.id, len(member_ids))
    result = await db.execute(_channel_with_members(channel.id))
    return result.scalar_one()


def _channel_with_members(channel_id: str) -> Select[tuple[Channel]]:
    return (
        select(Channel)
        .options(_WITH_MEMBERS)
        .where(Channel.id == channel_id)
        .execution_options(populate_existing=True)
    )


async def get_channel_by_id(db: AsyncSession, channel_id: str) -> Channel | None:
    """Return the channel with its members (and their users) loaded."""
    result = await db.execute(_channel_with_members(channel_id))
    return result.scalar_one_or_none()


async def list_channels_for_user(db: AsyncSession, user_id: str) -> list[Channel]:
    """Every channel the user is a member of, in creation order."""
    result = await db.execute(
        select(Channel)
        .join(ChannelMember, ChannelMember.channel_id == Channel.id)
        .where(ChannelMember.user_id == user_id)
        .options(_WITH_MEMBERS)
        .order_by(Channel.created_at)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def find_direct_message(db: AsyncSession, user_a: str, user_b: str) -> Channel | None:
    """Oldest direct message whose two members are ``user_a`` and ``user_b``."""
    a_channels = select(ChannelMember.channel_id).where(ChannelMember.user_id == user_a)
    b_channels = select(ChannelMember.channel_id).where(ChannelMember.user_id == user_b)
    result = await db.execute(
        select(Channel)
        .options(_WITH_MEMBERS)
        .where(
            Channel.type == DIRECT_MESSAGE,
            Channel.id.in_(a_channels),
            Channel.id.in_(b_channels),
        )
        .order_by(Channel.created_at)
        .limit(1)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()
