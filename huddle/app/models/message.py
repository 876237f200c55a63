from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from huddle.app.db import Base


class Message(Base):
    __tablename__ = "messages"

    # Insertion sequence, breaks ties between equal created_at values
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    channel_id: Mapped[str] = mapped_column(String, ForeignKey("channels.id"), nullable=False)
    sender_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False)
    content: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        Index("idx_messages_channel_created", "channel_id", "created_at"),
        Index("idx_messages_sender_created", "sender_id", "created_at"),
    )

    # Relationships
    channel: Mapped[Channel] = relationship("Channel", back_populates="messages")
    sender: Mapped[User] = relationship("User", back_populates="messages")
