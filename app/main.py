from fastapi import FastAPI

from app.config import get_settings
from app.infra.logging_config import get_logger
from app.routers import whatsapp

logger = get_logger("main")


def create_app(testing: bool = False) -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="WhatsApp intent classification and action pipeline",
        version="0.1.0",
        docs_url=None if settings.is_production else "/docs",
    )

    app.include_router(whatsapp.router)

    @app.get("/health", tags=["system"])
    def health() -> dict[str, str]:
        return {"status": "ok", "environment": settings.environment}

    if not testing:
        logger.info("Starting %s (%s)", settings.app_name, settings.environment)

    return app


app = create_app()
