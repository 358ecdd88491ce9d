"""ConversationMessage model: append-only log of one turn per row."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.db import Base


class ConversationMessage(Base):
    """
    One inbound message, the intent assigned to it and the reply sent back.

    Written by the pipeline, read only by reporting and the skip heuristic.
    """

    __tablename__ = "conversation_messages"

    __table_args__ = (
        Index(
            "ix_conversation_messages_session_created",
            "session_id",
            "created_at",
        ),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    session_id = Column(
        String(128),
        ForeignKey("conversation_sessions.session_id", ondelete="CASCADE"),
        nullable=False,
    )
    message = Column(Text, nullable=False)
    intent = Column(Text, nullable=True)
    response = Column(Text, nullable=True)
    used_language_model = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    session = relationship("ConversationSession", back_populates="messages")
