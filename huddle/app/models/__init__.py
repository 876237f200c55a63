from huddle.app.models.user import User
from huddle.app.models.channel import Channel
from huddle.app.models.channel_member import ChannelMember
from huddle.app.models.message import Message
from huddle.app.models.ai_chat import AiChatRecord

__all__ = [
    "User",
    "Channel",
    "ChannelMember",
    "Message",
    "AiChatRecord",
]
