"""Tests for SqlSessionStore."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from sqlalchemy import Text
from sqlalchemy.exc import OperationalError

from app.core.session_key import build_session_id
from app.exceptions import SessionStoreUnavailableError
from app.models.conversation_message import ConversationMessage
from app.models.conversation_session import ConversationSession


def test_get_or_create_creates_session(session_store, db, phone_number):
    session_id = build_session_id(phone_number)

    session, created = session_store.get_or_create_by_session_id(session_id, phone_number)

    assert created is True
    assert session.session_id == f"session_{phone_number}"
    assert session.phone_number == phone_number
    assert session.is_active is True
    assert session.session_data == {}
    assert db.query(ConversationSession).count() == 1


def test_get_or_create_refreshes_existing_session(session_store, db, setup_session):
    setup_session.is_active = False
    setup_session.last_activity_at = datetime.now(timezone.utc) - timedelta(days=2)
    db.commit()

    session, created = session_store.get_or_create_by_session_id(
        setup_session.session_id, setup_session.phone_number
    )

    assert created is False
    assert session.id == setup_session.id
    assert session.is_active is True
    assert session.last_intent == "waiting_location_for_restaurants"
    assert db.query(ConversationSession).count() == 1


@pytest.mark.asyncio
async def test_get_or_create_session_returns_snapshot(session_store, phone_number):
    snapshot = await session_store.get_or_create_session(build_session_id(phone_number), phone_number)
    assert snapshot.session_id == build_session_id(phone_number)
    assert snapshot.last_intent is None
    assert snapshot.session_data == {}


@pytest.mark.asyncio
async def test_get_or_create_session_wraps_database_errors(session_store, phone_number):
    with patch.object(
        session_store,
        "get_or_create_by_session_id",
        side_effect=OperationalError("SELECT", {}, Exception("database is locked")),
    ):
        with pytest.raises(SessionStoreUnavailableError):
            await session_store.get_or_create_session(build_session_id(phone_number), phone_number)


@pytest.mark.asyncio
async def test_update_session_context_sets_intent_and_merges_data(session_store, db, setup_session):
    await session_store.update_session_context(
        setup_session.session_id, "menu_selection", {"available_categories": ["a", "b"]}
    )
    await session_store.update_session_context(
        setup_session.session_id, "promotions", {"available_promotions": ["p"]}
    )

    db.expire_all()
    session = db.query(ConversationSession).filter_by(session_id=setup_session.session_id).one()
    assert session.last_intent == "promotions"
    assert session.conversation_step == "promotions"
    assert session.session_data == {
        "available_categories": ["a", "b"],
        "available_promotions": ["p"],
    }


@pytest.mark.asyncio
async def test_update_session_context_without_data_keeps_existing_data(session_store, db, setup_session):
    await session_store.update_session_context(setup_session.session_id, "x", {"found_companies": ["c1"]})
    await session_store.update_session_context(setup_session.session_id, None)

    db.expire_all()
    session = db.query(ConversationSession).filter_by(session_id=setup_session.session_id).one()
    assert session.last_intent is None
    assert session.session_data == {"found_companies": ["c1"]}


@pytest.mark.asyncio
async def test_update_session_context_ignores_unknown_session(session_store, db):
    await session_store.update_session_context("session_000", "menu_selection")
    assert db.query(ConversationSession).count() == 0


@pytest.mark.asyncio
async def test_append_message_records_turn(session_store, db, setup_session):
    await session_store.append_message(
        setup_session.session_id, "quero ver o cardápio", "2001", "🍽️ *Categorias disponíveis:*", True
    )

    entries = db.query(ConversationMessage).filter_by(session_id=setup_session.session_id).all()
    assert len(entries) == 1
    assert entries[0].message == "quero ver o cardápio"
    assert entries[0].intent == "2001"
    assert entries[0].response == "🍽️ *Categorias disponíveis:*"
    assert entries[0].used_language_model is True


@pytest.mark.asyncio
async def test_can_skip_model_replays_recent_repeat(session_store, setup_message, setup_session):
    snapshot = await session_store.get_or_create_session(
        setup_session.session_id, setup_session.phone_number
    )

    decision = await session_store.can_skip_model("Quais restaurantes tem perto de mim?", snapshot)

    assert decision.skip is True
    assert decision.intent == "waiting_location_for_restaurants"
    assert decision.reply == setup_message.response


@pytest.mark.asyncio
async def test_can_skip_model_for_new_request(session_store, setup_message, setup_session):
    snapshot = await session_store.get_or_create_session(
        setup_session.session_id, setup_session.phone_number
    )
    decision = await session_store.can_skip_model("tem promoção hoje?", snapshot)
    assert decision.skip is False


def test_deactivate_idle_sessions(session_store, db, setup_session):
    stale = ConversationSession(
        session_id="session_5500000000000",
        phone_number="5500000000000",
        last_activity_at=datetime.now(timezone.utc) - timedelta(hours=3),
        is_active=True,
        session_data={"found_companies": ["c1"]},
    )
    db.add(stale)
    db.commit()

    count = session_store.deactivate_idle_sessions(timedelta(hours=1))

    assert count == 1
    db.expire_all()
    assert db.query(ConversationSession).filter_by(session_id=stale.session_id).one().is_active is False
    assert db.query(ConversationSession).filter_by(session_id=setup_session.session_id).one().is_active is True
    assert db.query(ConversationSession).count() == 2


@pytest.mark.asyncio
async def test_long_intent_labels_are_stored_intact(session_store, db, setup_session):
    label = "contexto_" + "x" * 300

    await session_store.update_session_context(setup_session.session_id, label)
    await session_store.append_message(setup_session.session_id, "oi", label, "olá", True)

    db.expire_all()
    session = db.query(ConversationSession).filter_by(session_id=setup_session.session_id).one()
    assert session.last_intent == label
    assert session.conversation_step == label
    assert db.query(ConversationMessage).filter_by(session_id=setup_session.session_id).one().intent == label


def test_intent_columns_are_unbounded_text():
    assert isinstance(ConversationSession.__table__.c.last_intent.type, Text)
    assert isinstance(ConversationSession.__table__.c.conversation_step.type, Text)
    assert isinstance(ConversationMessage.__table__.c.intent.type, Text)


@pytest.mark.asyncio
async def test_failed_commit_rolls_back_and_keeps_session_usable(session_store, db, setup_session):
    error = OperationalError("COMMIT", {}, Exception("value too long"))
    with patch.object(db, "commit", side_effect=error), patch.object(
        db, "rollback", wraps=db.rollback
    ) as rollback:
        with pytest.raises(SessionStoreUnavailableError):
            await session_store.append_message(setup_session.session_id, "oi", "2001", "olá", True)
        with pytest.raises(SessionStoreUnavailableError):
            await session_store.update_session_context(setup_session.session_id, "menu_selection")
    assert rollback.call_count == 2

    await session_store.append_message(setup_session.session_id, "oi de novo", "2001", "olá", True)

    entries = db.query(ConversationMessage).filter_by(session_id=setup_session.session_id).all()
    assert [entry.message for entry in entries] == ["oi de novo"]
