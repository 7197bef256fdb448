from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from notification_service.core import deps
from notification_service.core.config import Settings
from notification_service.core.db import Database, DatabaseError, get_db
from notification_service.core.errors import database_error_text
from notification_service.modules.health import service

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    # Liveness only, never touches the database
    return "✅ Notification Service is running"


@router.get("/health")
async def health(
    db: Database = Depends(get_db),
    settings: Settings = Depends(deps.get_app_settings),
) -> Any:
    try:
        await service.current_time(db)
    except DatabaseError as e:
        return JSONResponse(
            status_code=500,
            content={
                "status": "DOWN",
                "service": settings.SERVICE_NAME,
                "db": "disconnected",
                "error": database_error_text(e, settings),
            },
        )
    return {"status": "UP", "service": settings.SERVICE_NAME, "db": "connected"}


@router.get("/db-check", response_class=PlainTextResponse)
async def db_check(
    db: Database = Depends(get_db),
    settings: Settings = Depends(deps.get_app_settings),
) -> Any:
    try:
        now = await service.current_time(db)
    except DatabaseError as e:
        return PlainTextResponse(f"❌ DB connection failed: {database_error_text(e, settings)}", status_code=500)
    return f"✅ DB Connected! Current Time: {now}"
