"""Thin wrapper around the OpenAI chat completions API."""

import logging
from functools import lru_cache

from openai import AsyncOpenAI, OpenAIError

from huddle.app.config import AI_SYSTEM_PROMPT, settings
from huddle.app.errors import AssistantUnavailableError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_openai_client() -> AsyncOpenAI:
    if not settings.openai_api_key:
        raise AssistantUnavailableError("AI assistant is not configured")
    return AsyncOpenAI(api_key=settings.openai_api_key)


async def ask_assistant(message: str, client: AsyncOpenAI | None = None) -> str:
    """Send one user message to the assistant and return its reply text."""
    client = client or get_openai_client()
    try:
        completion = await client.chat.completions.create(
            model=settings.openai_model,
            messages=[
                {"role": "system", "content": AI_SYSTEM_PROMPT},
                {"role": "user", "content": message},
            ],
        )
    except OpenAIError as exc:
        logger.exception("OpenAI request failed")
        raise AssistantUnavailableError() from exc

    reply = completion.choices[0].message.content
    if not reply:
        logger.warning("OpenAI returned an empty completion")
        raise AssistantUnavailableError("AI assistant returned an empty reply")
    return reply
