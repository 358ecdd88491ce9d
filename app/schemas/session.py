"""Pydantic schemas for conversation sessions and their message log."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SkipDecision(BaseModel):
    """Whether a turn can be answered without calling the language model."""

    skip: bool = False
    intent: Optional[str] = None
    reply: Optional[str] = None


class ConversationMessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    session_id: str
    message: str
    intent: Optional[str] = None
    response: Optional[str] = None
    used_language_model: bool = False
    created_at: datetime


class ConversationSessionRead(BaseModel):
    """Session snapshot. ``session_data`` is opaque JSON owned by the pipeline."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    session_id: str
    phone_number: Optional[str] = None
    last_intent: Optional[str] = None
    conversation_step: Optional[str] = None
    last_activity_at: datetime
    is_active: bool = True
    session_data: dict[str, Any] = Field(default_factory=dict)
