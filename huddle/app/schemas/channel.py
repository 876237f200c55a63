from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from huddle.app.config import CHANNEL_NAME_MAX_LENGTH, DESCRIPTION_MAX_LENGTH


class ChannelCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, min_length=1, max_length=CHANNEL_NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    type: Literal["channel", "dm"] = "channel"
    other_user_id: str | None = Field(default=None, alias="otherUserId")


class MemberResponse(BaseModel):
    id: str
    name: str


class ChannelResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str | None = None
    description: str | None = None
    channel_type: Literal["channel", "dm"] = Field(alias="channelType")
    members: list[MemberResponse]
