"""
Command to process one WhatsApp message.

Normalizes the envelope and hands it to the conversation orchestrator.
"""

from __future__ import annotations

import logging

from app.adapters.whatsapp import WhatsAppAdapter
from app.schemas.whatsapp import (
    ProcessMessageRequest,
    WhatsAppMessageRequest,
    WhatsAppResponse,
)
from app.services.conversation_orchestrator import ConversationOrchestrator


class ProcessMessageCommand:
    """Normalizes inbound envelopes and runs them through the orchestrator."""

    def __init__(
        self, orchestrator: ConversationOrchestrator, adapter: WhatsAppAdapter
    ) -> None:
        self.orchestrator = orchestrator
        self.adapter = adapter
        self.logger = logging.getLogger(__name__)

    async def execute(self, body: WhatsAppMessageRequest) -> WhatsAppResponse:
        """
        Process a webhook envelope.

        Args:
            body: The WhatsApp webhook envelope.

        Returns:
            WhatsAppResponse: The reply for the turn. Failures inside the
            pipeline come back as apology replies, never as exceptions.
        """
        inbound = self.adapter.to_inbound(body)
        self.logger.info(
            "Processing WhatsApp message %s (type=%s)", body.message_id, inbound.kind
        )
        return await self.orchestrator.process_message(inbound)

    async def execute_process_request(
        self, body: ProcessMessageRequest
    ) -> WhatsAppResponse:
        """
        Process a generic text request (phone number, message, optional session id).

        Args:
            body: The process request.

        Returns:
            WhatsAppResponse: The reply for the turn.
        """
        inbound = self.adapter.from_process_request(body)
        return await self.orchestrator.process_message(inbound)
