from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from huddle.app.db import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    # Subject identifier issued by the external identity provider
    auth_id: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    # Timestamps are stored as ISO 8601 UTC strings (see db.to_timestamp) throughout
    # the schema. Microsecond precision keeps string comparison equal to time order.
    created_at: Mapped[str] = mapped_column(String, nullable=False)

    # Relationships
    memberships: Mapped[list[ChannelMember]] = relationship(
        "ChannelMember", back_populates="user"
    )
    messages: Mapped[list[Message]] = relationship("Message", back_populates="sender")
