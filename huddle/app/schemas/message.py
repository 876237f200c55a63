from pydantic import BaseModel, ConfigDict, Field

from huddle.app.config import MESSAGE_MAX_LENGTH


class MessageCreate(BaseModel):
    content: str = Field(min_length=1, max_length=MESSAGE_MAX_LENGTH)


class SenderResponse(BaseModel):
    id: str
    name: str


class MessageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    content: str
    created_at: str = Field(alias="createdAt")
    sender: SenderResponse
    channel_id: str = Field(alias="channelId")
