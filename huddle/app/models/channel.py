from __future__ import annotations

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from huddle.app.db import Base

GROUP_CHANNEL = "channel"
DIRECT_MESSAGE = "dm"


class Channel(Base):
    __tablename__ = "channels"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    type: Mapped[str] = mapped_column(String, nullable=False)  # "channel" or "dm"
    # Only group channels carry a name and description
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    created_by: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False)
    created_at: Mapped[str] = mapped_column(String, nullable=False, index=True)

    # Relationships
    members: Mapped[list[ChannelMember]] = relationship("ChannelMember", back_populates="channel")
    messages: Mapped[list[Message]] = relationship("Message", back_populates="channel")
