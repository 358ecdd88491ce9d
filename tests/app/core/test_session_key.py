"""Tests for session id derivation."""

from app.core.session_key import build_session_id, channel_id_from_conversation_id


def test_build_session_id(faker):
    phone = faker.msisdn()
    assert build_session_id(phone) == f"session_{phone}"


def test_channel_id_from_conversation_id():
    assert channel_id_from_conversation_id("session_5511999990000") == "5511999990000"


def test_channel_id_from_conversation_id_rejects_other_shapes():
    assert channel_id_from_conversation_id(None) is None
    assert channel_id_from_conversation_id("") is None
    assert channel_id_from_conversation_id("conv_5511") is None
    assert channel_id_from_conversation_id("session_") is None
