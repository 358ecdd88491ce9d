"""
WhatsApp platform adapter.

Turns webhook envelopes into ``InboundMessage`` and answers the Meta
subscription handshake.
"""

from __future__ import annotations

from typing import Any, Optional

from app.adapters.base import BasePlatformAdapter
from app.core.values import optional_str, to_float
from app.exceptions import InvalidArgumentError
from app.schemas.whatsapp import (
    InboundMessage,
    MessageKind,
    ProcessMessageRequest,
    WhatsAppMessageRequest,
)

SUBSCRIBE_MODE = "subscribe"


def _coordinate(value: Any) -> Optional[float]:
    try:
        return to_float(value)
    except InvalidArgumentError:
        return None


def resolve_kind(request: WhatsAppMessageRequest) -> Optional[MessageKind]:
    """
    ``location`` needs both coordinates as finite numbers and ``text`` needs
    a non-empty body; anything else with a type is unsupported. No type at
    all gives None.
    """
    message_type = optional_str(request.type)
    if message_type is None:
        return None
    message_type = message_type.lower()
    if (
        message_type == MessageKind.LOCATION.value
        and _coordinate(request.latitude) is not None
        and _coordinate(request.longitude) is not None
    ):
        return MessageKind.LOCATION
    if message_type == MessageKind.TEXT.value and optional_str(request.text):
        return MessageKind.TEXT
    return MessageKind.UNSUPPORTED


class WhatsAppAdapter(BasePlatformAdapter):
    def __init__(self, verify_token: Optional[str] = None) -> None:
        self._verify_token = verify_token

    def to_inbound(self, request: WhatsAppMessageRequest) -> InboundMessage:
        kind = resolve_kind(request)
        location = kind == MessageKind.LOCATION
        extra: dict[str, Any] = {}
        if request.timestamp is not None:
            extra["timestamp"] = request.timestamp
        return InboundMessage(
            channel_id=optional_str(request.from_),
            kind=kind,
            text=request.text,
            latitude=_coordinate(request.latitude) if location else None,
            longitude=_coordinate(request.longitude) if location else None,
            context_data=dict(request.context_data or {}),
            message_id=request.message_id or "",
            conversation_id=request.conversation_id,
            **extra,
        )

    def parse_webhook(self, raw_payload: dict[str, Any]) -> InboundMessage:
        return self.to_inbound(WhatsAppMessageRequest.model_validate(raw_payload))

    def from_process_request(self, request: ProcessMessageRequest) -> InboundMessage:
        """Map a generic process request onto a text envelope."""
        envelope = WhatsAppMessageRequest(
            from_=request.phone_number,
            type=MessageKind.TEXT.value,
            text=request.message,
            conversation_id=request.session_id,
            context_data=request.context_data,
        )
        return self.to_inbound(envelope)

    def verify_webhook(
        self, mode: Optional[str], token: Optional[str], challenge: Optional[str]
    ) -> Optional[str]:
        """Echo ``hub.challenge`` only for a subscribe request carrying our verify token."""
        if not self._verify_token:
            return None
        if mode == SUBSCRIBE_MODE and token == self._verify_token:
            return challenge
        return None
