"""Classification and dispatch results."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.whatsapp import WhatsAppResponse


class ClassificationReply(BaseModel):
    """Structured reply requested from the chat model."""

    message: str
    codes: str
    wait_for_response: bool
    conversation_context: Optional[str] = None


class IntentResult(BaseModel):
    """
    Output of intent classification.

    ``reply_message`` is only shown when ``action_codes`` is empty; otherwise
    the dispatcher's aggregated reply replaces it.
    """

    reply_message: str
    action_codes: list[int] = Field(default_factory=list)
    wait_for_response: bool = False
    conversation_context: Optional[str] = None
    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("reply_message")
    @classmethod
    def _reply_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("reply_message must not be empty")
        return value

    def to_response(self) -> WhatsAppResponse:
        return WhatsAppResponse(
            message=self.reply_message,
            wait_for_response=self.wait_for_response,
            data=dict(self.data),
            codes=list(self.action_codes),
            conversation_context=self.conversation_context,
        )


class DispatchResult(BaseModel):
    """One action's contribution. An empty message contributes nothing to the reply."""

    message: str = ""
    wait_for_response: bool = False
    side_data: Optional[dict[str, Any]] = None
