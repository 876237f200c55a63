from huddle.app.schemas.ai_chat import (
    AiChatRecordResponse,
    AiChatReply,
    AiChatRequest,
    AiUsageResponse,
)
from huddle.app.schemas.channel import ChannelCreate, ChannelResponse, MemberResponse
from huddle.app.schemas.message import MessageCreate, MessageResponse, SenderResponse
from huddle.app.schemas.user import UserResponse, UserSignup, UserSummary

__all__ = [
    "UserSignup",
    "UserResponse",
    "UserSummary",
    "ChannelCreate",
    "ChannelResponse",
    "MemberResponse",
    "MessageCreate",
    "MessageResponse",
    "SenderResponse",
    "AiChatRequest",
    "AiChatReply",
    "AiUsageResponse",
    "AiChatRecordResponse",
]
