"""Celery task that deactivates idle conversation sessions."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from app.config import get_settings
from app.infra.celery_app import celery_app
from app.infra.logging_config import get_logger
from app.services.session_store import SqlSessionStore
from app.utils.db.db_session_helper import db_session

logger = get_logger("session_cleanup")


@celery_app.task(name="app.tasks.session_cleanup_task.deactivate_idle_sessions_task")
def deactivate_idle_sessions_task(idle_minutes: Optional[int] = None) -> int:
    """
    Mark sessions idle for longer than ``idle_minutes`` (default
    ``SESSION_IDLE_MINUTES``) as inactive. Does nothing when neither is set.
    """
    idle_minutes = idle_minutes or get_settings().session_idle_minutes
    if not idle_minutes:
        logger.debug("Session idle timeout not configured; skipping cleanup")
        return 0

    with db_session() as db:
        count = SqlSessionStore(db).deactivate_idle_sessions(timedelta(minutes=idle_minutes))

    logger.info("Deactivated %d idle sessions", count)
    return count
