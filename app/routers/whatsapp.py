"""
WhatsApp routes.

The webhook always answers 200 with a reply body; pipeline failures are
turned into apology messages by the orchestrator.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from app.adapters.whatsapp import WhatsAppAdapter
from app.commands.whatsapp.process_message_command import ProcessMessageCommand
from app.routers.utils.dependencies import get_orchestrator, get_whatsapp_adapter
from app.schemas.whatsapp import (
    ProcessMessageRequest,
    WhatsAppMessageRequest,
    WhatsAppResponse,
)
from app.services.conversation_orchestrator import ConversationOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/whatsapp", tags=["whatsapp"])


@router.post("/webhook", response_model=WhatsAppResponse)
async def receive_message(
    body: WhatsAppMessageRequest,
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
    adapter: WhatsAppAdapter = Depends(get_whatsapp_adapter),
) -> WhatsAppResponse:
    """Receive one WhatsApp message and return the reply for it."""
    return await ProcessMessageCommand(orchestrator, adapter).execute(body)


@router.get("/webhook", response_class=PlainTextResponse)
def verify_webhook(
    mode: Optional[str] = Query(default=None, alias="hub.mode"),
    token: Optional[str] = Query(default=None, alias="hub.verify_token"),
    challenge: Optional[str] = Query(default=None, alias="hub.challenge"),
    adapter: WhatsAppAdapter = Depends(get_whatsapp_adapter),
) -> str:
    """Meta webhook subscription handshake."""
    echoed = adapter.verify_webhook(mode, token, challenge)
    if echoed is None:
        logger.warning("WhatsApp webhook verification failed (mode=%s)", mode)
        raise HTTPException(status_code=403, detail="Webhook verification failed")
    return echoed


@router.post("/process", response_model=WhatsAppResponse)
async def process_message(
    body: ProcessMessageRequest,
    orchestrator: ConversationOrchestrator = Depends(get_orchestrator),
    adapter: WhatsAppAdapter = Depends(get_whatsapp_adapter),
) -> WhatsAppResponse:
    """Process a plain text message for a phone number."""
    return await ProcessMessageCommand(orchestrator, adapter).execute_process_request(body)
