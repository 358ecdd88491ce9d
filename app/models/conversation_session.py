"""ConversationSession model: one row per WhatsApp phone number."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import TimestampMixin


class ConversationSession(Base, TimestampMixin):
    """Per-channel conversation state. Identified by session_id (session_<phone>)."""

    __tablename__ = "conversation_sessions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    session_id = Column(String(128), unique=True, nullable=False, index=True)
    phone_number = Column(String(32), nullable=False)
    last_intent = Column(Text, nullable=True)
    conversation_step = Column(Text, nullable=True)
    last_activity_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    session_data = Column(
        JSON().with_variant(JSONB, "postgresql"), nullable=False, default=dict
    )
    version = Column(Integer, nullable=False, default=1)

    messages = relationship(
        "ConversationMessage",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="ConversationMessage.created_at",
    )

    __mapper_args__ = {"version_id_col": version}
