"""Session id derivation from the WhatsApp phone number."""

from __future__ import annotations

from typing import Optional

SESSION_PREFIX = "session_"


def build_session_id(channel_id: str) -> str:
    """Deterministic session id for a phone number: ``session_<phone>``."""
    return f"{SESSION_PREFIX}{channel_id}"


def channel_id_from_conversation_id(conversation_id: Optional[str]) -> Optional[str]:
    """
    Recover the phone number from a ``session_<phone>`` conversation id.

    Returns None when the id is missing, has another shape, or carries an
    empty phone part.
    """
    if not conversation_id or not conversation_id.startswith(SESSION_PREFIX):
        return None
    phone = conversation_id[len(SESSION_PREFIX):].strip()
    return phone or None
