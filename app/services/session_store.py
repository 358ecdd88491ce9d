"""Conversation session persistence and the skip check."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.exceptions import SessionStoreUnavailableError
from app.infra.logging_config import get_logger
from app.models.conversation_message import ConversationMessage
from app.models.conversation_session import ConversationSession
from app.schemas.session import (
    ConversationMessageRead,
    ConversationSessionRead,
    SkipDecision,
)
from app.services.skip_heuristic import SkipHeuristic

logger = get_logger(__name__)


class SessionStore(Protocol):
    async def get_or_create_session(
        self, session_id: str, channel_id: str
    ) -> ConversationSessionRead: ...

    async def can_skip_model(
        self, text: Optional[str], session: ConversationSessionRead
    ) -> SkipDecision: ...

    async def update_session_context(
        self,
        session_id: str,
        intent: Optional[str],
        context_data: Optional[dict[str, Any]] = None,
    ) -> None: ...

    async def append_message(
        self,
        session_id: str,
        text: str,
        intent: Optional[str],
        reply: Optional[str],
        used_model: bool,
    ) -> None: ...


class SqlSessionStore:
    """
    SQLAlchemy-backed session store.

    Every method finishes its read-modify-write before returning control to
    the event loop. The ``version`` column of ``ConversationSession`` turns a
    concurrent write from another process into ``StaleDataError``.
    """

    def __init__(self, db: Session, heuristic: Optional[SkipHeuristic] = None) -> None:
        self.db = db
        if heuristic is None:
            window = get_settings().skip_repeat_window_minutes
            heuristic = SkipHeuristic(repeat_window=timedelta(minutes=window))
        self._heuristic = heuristic

    def _get(self, session_id: str) -> Optional[ConversationSession]:
        return (
            self.db.query(ConversationSession)
            .filter(ConversationSession.session_id == session_id)
            .first()
        )

    def get_or_create_by_session_id(
        self, session_id: str, channel_id: str
    ) -> tuple[ConversationSession, bool]:
        """Get existing session or create one. Returns (session, created)."""
        now = datetime.now(timezone.utc)
        session = self._get(session_id)
        if session is not None:
            session.last_activity_at = now
            session.is_active = True
            self.db.commit()
            self.db.refresh(session)
            return session, False

        session = ConversationSession(
            session_id=session_id,
            phone_number=channel_id,
            last_activity_at=now,
            is_active=True,
            session_data={},
        )
        self.db.add(session)
        try:
            self.db.commit()
        except IntegrityError:
            # Another turn created it first.
            self.db.rollback()
            session = self._get(session_id)
            if session is None:
                raise
            return session, False
        self.db.refresh(session)
        logger.info("Created conversation session %s for %s", session_id, channel_id)
        return session, True

    async def get_or_create_session(
        self, session_id: str, channel_id: str
    ) -> ConversationSessionRead:
        try:
            session, _ = self.get_or_create_by_session_id(session_id, channel_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise SessionStoreUnavailableError(
                f"Could not load session {session_id}: {e}"
            ) from e
        return ConversationSessionRead.model_validate(session)

    def get_last_message(self, session_id: str) -> Optional[ConversationMessage]:
        return (
            self.db.query(ConversationMessage)
            .filter(ConversationMessage.session_id == session_id)
            .order_by(ConversationMessage.created_at.desc())
            .first()
        )

    async def can_skip_model(
        self, text: Optional[str], session: ConversationSessionRead
    ) -> SkipDecision:
        last = self.get_last_message(session.session_id)
        last_message = ConversationMessageRead.model_validate(last) if last else None
        return self._heuristic.decide(text, session, last_message)

    async def update_session_context(
        self,
        session_id: str,
        intent: Optional[str],
        context_data: Optional[dict[str, Any]] = None,
    ) -> None:
        session = self._get(session_id)
        if session is None:
            logger.warning("Cannot update context of unknown session %s", session_id)
            return
        session.last_intent = intent
        session.conversation_step = intent
        session.last_activity_at = datetime.now(timezone.utc)
        if context_data:
            # Reassign so the JSON column is flagged as modified.
            session.session_data = {**(session.session_data or {}), **context_data}
        self._commit(f"update session {session_id}")
        logger.info("Updated context for session %s: %s", session_id, intent)

    async def append_message(
        self,
        session_id: str,
        text: str,
        intent: Optional[str],
        reply: Optional[str],
        used_model: bool,
    ) -> None:
        entry = ConversationMessage(
            session_id=session_id,
            message=text,
            intent=intent,
            response=reply,
            used_language_model=used_model,
        )
        self.db.add(entry)
        self._commit(f"log message for session {session_id}")

    def _commit(self, action: str) -> None:
        """Commit, or roll back and raise so the Session stays usable."""
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise SessionStoreUnavailableError(f"Could not {action}: {e}") from e

    def deactivate_idle_sessions(self, max_age: timedelta) -> int:
        """Mark sessions idle for longer than ``max_age`` as inactive. Rows are kept."""
        cutoff = datetime.now(timezone.utc) - max_age
        sessions = (
            self.db.query(ConversationSession)
            .filter(
                ConversationSession.is_active.is_(True),
                ConversationSession.last_activity_at < cutoff,
            )
            .all()
        )
        for session in sessions:
            session.is_active = False
            logger.info("Deactivated idle session %s", session.session_id)
        self.db.commit()
        return len(sessions)
