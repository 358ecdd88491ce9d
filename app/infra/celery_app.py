from celery import Celery

from app.config import get_settings

settings = get_settings()

celery_app = Celery(
    settings.app_name,
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["app.tasks.session_cleanup_task"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_always_eager=settings.is_test,
    beat_schedule={
        "deactivate-idle-sessions": {
            "task": "app.tasks.session_cleanup_task.deactivate_idle_sessions_task",
            "schedule": settings.session_cleanup_interval_minutes * 60.0,
        },
    },
)
