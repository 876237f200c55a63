"""AI assistant endpoints, gated by the daily usage ledger."""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.app.auth import get_current_user
from huddle.app.config import AI_DAILY_LIMIT, AI_HISTORY_LIMIT
from huddle.app.db import get_db
from huddle.app.errors import AiLimitExceededError
from huddle.app.models.user import User
from huddle.app.schemas.ai_chat import (
    AiChatRecordResponse,
    AiChatReply,
    AiChatRequest,
    AiUsageResponse,
)
from huddle.app.services import ai_usage
from huddle.app.services.ai_assistant import ask_assistant

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai-chat", tags=["ai-chat"])


@router.post("", response_model=AiChatReply)
async def chat(
    data: AiChatRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> AiChatReply:
    if await ai_usage.is_limit_exceeded(db, user.id):
        logger.info("User %s hit the daily AI chat limit", user.id)
        raise AiLimitExceededError(
            f"You can use the AI assistant {AI_DAILY_LIMIT} times per day. Try again tomorrow."
        )

    reply = await ask_assistant(data.message)
    await ai_usage.record_conversation(db, user.id, data.message, reply)
    return AiChatReply(response=reply, remaining=await ai_usage.remaining(db, user.id))


@router.get("/usage", response_model=AiUsageResponse)
async def usage(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> AiUsageResponse:
    used = await ai_usage.today_count(db, user.id)
    return AiUsageResponse(used=used, limit=AI_DAILY_LIMIT, remaining=max(0, AI_DAILY_LIMIT - used))


@router.get("/history", response_model=list[AiChatRecordResponse])
async def chat_history(
    limit: int = Query(default=AI_HISTORY_LIMIT, ge=1, le=AI_HISTORY_LIMIT),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[AiChatRecordResponse]:
    records = await ai_usage.history(db, user.id, limit=limit)
    return [
        AiChatRecordResponse(
            id=r.id, message=r.message, response=r.response, created_at=r.created_at
        )
        for r in records
    ]
