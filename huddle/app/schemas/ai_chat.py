from pydantic import BaseModel, ConfigDict, Field

from huddle.app.config import MESSAGE_MAX_LENGTH


class AiChatRequest(BaseModel):
    message: str = Field(min_length=1, max_length=MESSAGE_MAX_LENGTH)


class AiChatReply(BaseModel):
    response: str
    remaining: int


class AiUsageResponse(BaseModel):
    used: int
    limit: int
    remaining: int


class AiChatRecordResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    message: str
    response: str
    created_at: str = Field(alias="createdAt")
