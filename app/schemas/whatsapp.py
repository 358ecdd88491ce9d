"""
WhatsApp message contracts.

``WhatsAppMessageRequest`` is the webhook envelope as the channel posts it;
``InboundMessage`` is the normalized, immutable turn the pipeline consumes;
``WhatsAppResponse`` is what goes back to the channel.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic.alias_generators import to_camel


class MessageKind(str, Enum):
    TEXT = "text"
    LOCATION = "location"
    UNSUPPORTED = "unsupported"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WhatsAppMessageRequest(_CamelModel):
    """
    Webhook envelope. Every field is optional here; the orchestrator validates.

    A field of the wrong type is read as absent instead of failing the whole
    request, so the channel still gets a reply. Numbers are accepted for
    string fields and coordinates are kept raw for the adapter to coerce.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    message_id: Optional[str] = ""
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    type: Optional[str] = None
    text: Optional[str] = None
    latitude: Any = None
    longitude: Any = None
    timestamp: Optional[datetime] = None
    conversation_id: Optional[str] = None
    context_data: Optional[dict[str, Any]] = None

    @field_validator(
        "message_id", "from_", "to", "type", "text", "timestamp", "conversation_id", "context_data",
        mode="wrap",
    )
    @classmethod
    def _absent_when_invalid(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None


class ProcessMessageRequest(_CamelModel):
    """Generic text processing request (apps other than the WhatsApp webhook)."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    phone_number: Optional[str] = None
    message: str = ""
    session_id: Optional[str] = None
    context_data: Optional[dict[str, Any]] = None


class InboundMessage(BaseModel):
    """One user turn. Created per webhook call and discarded after processing."""

    model_config = ConfigDict(frozen=True)

    channel_id: Optional[str]
    kind: Optional[MessageKind]
    text: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    context_data: dict[str, Any] = Field(default_factory=dict)
    message_id: str = ""
    conversation_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class WhatsAppResponse(_CamelModel):
    """Reply for one turn. Absent optional fields mean empty/false."""

    message: str = ""
    wait_for_response: bool = False
    data: dict[str, Any] = Field(default_factory=dict)
    codes: list[int] = Field(default_factory=list)
    conversation_context: Optional[str] = None


# Text recorded and classified for a location share (location messages carry no text).
LOCATION_TURN_TEXT = "Usuário enviou localização"
