from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from app.adapters.catalog import CatalogQueryFacade, HttpCatalogFacade
from app.adapters.whatsapp import WhatsAppAdapter
from app.config import get_settings
from app.db import get_db
from app.services.action_dispatcher import ActionDispatcher
from app.services.conversation_orchestrator import ConversationOrchestrator
from app.services.intent_classifier import IntentClassifier
from app.services.llm_classifier import LLMClassifierAdapter
from app.services.session_store import SqlSessionStore
from app.workers.llm import ChatModelAdapter, build_llm_runner_from_env


def get_whatsapp_adapter() -> WhatsAppAdapter:
    """FastAPI dependency for the WhatsApp adapter."""
    return WhatsAppAdapter(verify_token=get_settings().whatsapp_verify_token)


@lru_cache(maxsize=1)
def get_chat_model() -> ChatModelAdapter:
    """FastAPI dependency for the chat model. Built once per process."""
    return build_llm_runner_from_env()


def get_catalog() -> CatalogQueryFacade:
    """FastAPI dependency for the catalog facade."""
    return HttpCatalogFacade()


def get_orchestrator(
    db: Session = Depends(get_db),
    chat_model: ChatModelAdapter = Depends(get_chat_model),
    catalog: CatalogQueryFacade = Depends(get_catalog),
) -> ConversationOrchestrator:
    """FastAPI dependency wiring one orchestrator per request."""
    settings = get_settings()
    classifier = IntentClassifier(
        LLMClassifierAdapter(chat_model, timeout_seconds=settings.llm_timeout_seconds)
    )
    return ConversationOrchestrator(
        session_store=SqlSessionStore(db),
        classifier=classifier,
        dispatcher=ActionDispatcher(catalog),
    )
