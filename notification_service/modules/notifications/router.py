import logging
from typing import Any, List

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from notification_service.core import deps
from notification_service.core.config import Settings
from notification_service.core.db import Database, DatabaseError, get_db
from notification_service.core.errors import database_error_response, error_response
from notification_service.modules.notifications import schemas, service

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND_MESSAGE = "Notification not found"


async def read_create_payload(request: Request) -> schemas.NotificationCreate:
    """
    Parses the creation body by hand instead of as a body parameter, so that
    on /notify the shared-secret check runs before the body is even decoded.
    """
    try:
        body = await request.json()
    except ValueError:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": None}]
        )
    try:
        return schemas.NotificationCreate.model_validate(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


async def _create(
    db: Database,
    settings: Settings,
    notification_in: schemas.NotificationCreate,
    success_message: str,
) -> Any:
    if not notification_in.is_complete:
        return error_response(400, "Missing required fields")

    try:
        notification = await service.create_notification(db, notification_in)
    except DatabaseError as e:
        return database_error_response(e, settings)

    logger.info(
        f"[Notifications] Created {notification['notification_id']} for account {notification['account_id']}"
    )
    return {"message": success_message, "notification": notification}


@router.post(
    "/notify",
    response_model=schemas.NotificationResponse,
    status_code=201,
    dependencies=[Depends(deps.verify_service_auth)],
)
async def notify(
    notification_in: schemas.NotificationCreate = Depends(read_create_payload),
    db: Database = Depends(get_db),
    settings: Settings = Depends(deps.get_app_settings),
) -> Any:
    """
    Create a notification on behalf of another service (x-api-key required).
    """
    return await _create(db, settings, notification_in, "✅ Notification created (inter-service)")


@router.post("/notifications", response_model=schemas.NotificationResponse, status_code=201)
async def create_notification(
    notification_in: schemas.NotificationCreate = Depends(read_create_payload),
    db: Database = Depends(get_db),
    settings: Settings = Depends(deps.get_app_settings),
) -> Any:
    # Open to direct callers, no shared-secret check on this route
    return await _create(db, settings, notification_in, "✅ Notification created")


@router.get("/notifications", response_model=List[schemas.NotificationRead])
async def list_notifications(
    db: Database = Depends(get_db),
    settings: Settings = Depends(deps.get_app_settings),
) -> Any:
    """
    All notifications, most recent first.
    """
    try:
        return await service.list_notifications(db)
    except DatabaseError as e:
        return database_error_response(e, settings)


@router.put("/notifications/{id}", response_model=schemas.NotificationResponse)
async def update_notification_status(
    id: int,
    update_in: schemas.NotificationStatusUpdate,
    db: Database = Depends(get_db),
    settings: Settings = Depends(deps.get_app_settings),
) -> Any:
    if not update_in.status:
        return error_response(400, "Missing required fields")

    try:
        notification = await service.update_status(db, id, update_in.status)
    except DatabaseError as e:
        return database_error_response(e, settings)

    if not notification:
        return JSONResponse(status_code=404, content={"message": NOT_FOUND_MESSAGE})

    logger.info(f"[Notifications] {id} -> {update_in.status}")
    return {"message": "✅ Notification updated", "notification": notification}


@router.delete("/notifications/{id}", response_model=schemas.MessageResponse)
async def delete_notification(
    id: int,
    db: Database = Depends(get_db),
    settings: Settings = Depends(deps.get_app_settings),
) -> Any:
    try:
        notification = await service.delete_notification(db, id)
    except DatabaseError as e:
        return database_error_response(e, settings)

    if not notification:
        return JSONResponse(status_code=404, content={"message": NOT_FOUND_MESSAGE})

    logger.info(f"[Notifications] Deleted {id}")
    return {"message": "🗑️ Notification deleted successfully"}
