"""Membership-based access gate for channel-scoped operations."""

from huddle.app.errors import AuthorizationError
from huddle.app.models.channel import Channel


def can_access(channel: Channel, user_id: str) -> bool:
    """True iff the user is a member of the channel.

    ``channel.members`` must already be loaded (see channel_manager).
    """
    return any(member.user_id == user_id for member in channel.members)


def require_access(channel: Channel, user_id: str) -> None:
    if not can_access(channel, user_id):
        raise AuthorizationError()
