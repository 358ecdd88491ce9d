"""
Platform adapter interface.

Adapters encapsulate platform-specific logic and expose a normalized
message format to the conversation pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from app.schemas.whatsapp import InboundMessage


class BasePlatformAdapter(ABC):
    """Contract for platform adapters. New platforms implement this interface."""

    @abstractmethod
    def parse_webhook(self, raw_payload: dict[str, Any]) -> InboundMessage:
        """Parse raw webhook payload into normalized inbound message. Raise if invalid."""
        ...

    def verify_webhook(
        self, mode: Optional[str], token: Optional[str], challenge: Optional[str]
    ) -> Optional[str]:
        """
        Answer the platform's subscription handshake. Override if the platform
        supports it. Return the challenge to echo back, or None to reject.
        """
        return challenge
