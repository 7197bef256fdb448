from typing import Any

from sqlalchemy import func, select

from notification_service.core.db import Database


async def current_time(db: Database) -> Any:
    """Round-trip query: asks the database for its current time."""
    row = await db.fetch_one(select(func.now().label("now")))
    return row["now"]
