"""AI usage ledger: per-user daily quota for the AI assistant.

The count is derived from stored records and the current time, so it resets
by itself at the server's local midnight; there is no reset job.

``record_conversation`` does not re-check the quota. Callers check
``is_limit_exceeded`` first, and concurrent requests from the same user can
each pass the check and overshoot the limit by one record apiece.
"""

import logging
import uuid
from datetime import UTC, datetime, time

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.app.config import AI_DAILY_LIMIT, AI_HISTORY_LIMIT
from huddle.app.db import to_timestamp
from huddle.app.models.ai_chat import AiChatRecord

logger = logging.getLogger(__name__)


def start_of_day(now: datetime | None = None) -> datetime:
    """Midnight of the current day in the server's local timezone."""
    local = (now or datetime.now(UTC)).astimezone()
    # Resolve midnight with the offset in force at midnight, not at `now`
    return datetime.combine(local.date(), time.min).astimezone()


async def today_count(db: AsyncSession, user_id: str, now: datetime | None = None) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(AiChatRecord)
        .where(
            AiChatRecord.user_id == user_id,
            AiChatRecord.created_at >= to_timestamp(start_of_day(now)),
        )
    )
    return result.scalar_one()


async def remaining(db: AsyncSession, user_id: str, now: datetime | None = None) -> int:
    return max(0, AI_DAILY_LIMIT - await today_count(db, user_id, now))


async def is_limit_exceeded(db: AsyncSession, user_id: str, now: datetime | None = None) -> bool:
    return await today_count(db, user_id, now) >= AI_DAILY_LIMIT


async def record_conversation(
    db: AsyncSession,
    user_id: str,
    request: str,
    response: str,
    now: datetime | None = None,
) -> AiChatRecord:
    record = AiChatRecord(
        id=str(uuid.uuid4()),
        user_id=user_id,
        message=request,
        response=response,
        created_at=to_timestamp(now),
    )
    db.add(record)
    await db.flush()
    logger.info("Recorded AI conversation %s for user %s", record.id, user_id)
    return record


async def history(
    db: AsyncSession, user_id: str, limit: int = AI_HISTORY_LIMIT
) -> list[AiChatRecord]:
    """Most recent conversations first."""
    result = await db.execute(
        select(AiChatRecord)
        .where(AiChatRecord.user_id == user_id)
        .order_by(desc(AiChatRecord.created_at))
        .limit(limit)
    )
    return list(result.scalars().all())
