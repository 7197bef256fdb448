import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from notification_service.core.config import Settings, get_settings
from notification_service.core.db import Database
from notification_service.core.errors import register_exception_handlers
from notification_service.modules.health.router import router as health_router
from notification_service.modules.notifications.router import router as notifications_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    # basicConfig leaves an already configured root logger alone
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("notification_service").setLevel(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    configure_logging(settings)
    db = Database(settings)
    app.state.db = db
    try:
        if settings.DB_CREATE_TABLES:
            await db.create_tables()
        if settings.uses_default_api_key:
            logger.warning("[Startup] SERVICE_API_KEY is not set, using the built-in default key.")
        logger.info(f"[Startup] {settings.SERVICE_NAME} ready on port {settings.PORT}")
        yield
    finally:
        await db.dispose()
        logger.info(f"[Shutdown] {settings.SERVICE_NAME} stopped.")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.settings = settings

    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(notifications_router, tags=["notifications"])
    return app


app = create_app()


def run():
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
