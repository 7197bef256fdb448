from typing import Any, Dict, List, Optional

from sqlalchemy import delete, insert, select, update

from notification_service.core.db import Database
from notification_service.modules.notifications import models, schemas

notifications = models.Notification.__table__


async def create_notification(db: Database, notification_in: schemas.NotificationCreate) -> Dict[str, Any]:
    stmt = (
        insert(notifications)
        .values(
            account_id=notification_in.account_id,
            message=notification_in.message,
            channel=notification_in.channel,
            status=notification_in.status,
        )
        .returning(notifications)
    )
    return await db.fetch_one(stmt)


async def list_notifications(db: Database) -> List[Dict[str, Any]]:
    stmt = select(notifications).order_by(notifications.c.notification_id.desc())
    return await db.fetch_all(stmt)


async def update_status(db: Database, notification_id: int, status: str) -> Optional[Dict[str, Any]]:
    """Returns the updated row, or None when no row has that id."""
    stmt = (
        update(notifications)
        .where(notifications.c.notification_id == notification_id)
        .values(status=status)
        .returning(notifications)
    )
    return await db.fetch_one(stmt)


async def delete_notification(db: Database, notification_id: int) -> Optional[Dict[str, Any]]:
    stmt = (
        delete(notifications)
        .where(notifications.c.notification_id == notification_id)
        .returning(notifications)
    )
    return await db.fetch_one(stmt)
