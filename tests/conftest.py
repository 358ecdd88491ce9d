import os

os.environ["ENV"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.db import Base, SessionLocal, engine, get_db  # noqa: E402
import app.models  # noqa: E402,F401
from app.main import create_app  # noqa: E402
from app.routers.utils.dependencies import get_catalog, get_chat_model  # noqa: E402
from app.services.action_dispatcher import ActionDispatcher  # noqa: E402
from app.services.conversation_orchestrator import ConversationOrchestrator  # noqa: E402
from app.services.intent_classifier import IntentClassifier  # noqa: E402
from app.services.llm_classifier import LLMClassifierAdapter  # noqa: E402
from app.services.session_store import SqlSessionStore  # noqa: E402
from tests.fixtures.fakes import FakeChatModel  # noqa: E402

pytest_plugins = [
    "tests.fixtures.catalog_fixtures",
    "tests.fixtures.session_fixtures",
]


@pytest.fixture(scope="function")
def db():
    """In-memory SQLite session; tables are created and dropped per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def fake_chat_model():
    return FakeChatModel(
        payload={
            "message": "Posso ajudar com restaurantes, cardápio ou pedidos.",
            "codes": "",
            "wait_for_response": True,
            "conversation_context": "general_help",
        }
    )


@pytest.fixture(scope="function")
def session_store(db):
    return SqlSessionStore(db)


@pytest.fixture(scope="function")
def orchestrator(session_store, fake_chat_model, fake_catalog):
    return ConversationOrchestrator(
        session_store=session_store,
        classifier=IntentClassifier(LLMClassifierAdapter(fake_chat_model, timeout_seconds=1)),
        dispatcher=ActionDispatcher(fake_catalog),
    )


@pytest.fixture
def client(db, fake_chat_model, fake_catalog):
    """Client with db, chat model and catalog overrides."""
    app = create_app(testing=True)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_chat_model] = lambda: fake_chat_model
    app.dependency_overrides[get_catalog] = lambda: fake_catalog
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
