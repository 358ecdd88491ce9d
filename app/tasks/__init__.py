# Import celery app first
from app.infra.celery_app import celery_app
from app.tasks.session_cleanup_task import deactivate_idle_sessions_task

__all__ = [
    "celery_app",
    "deactivate_idle_sessions_task",
]
