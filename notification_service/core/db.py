import logging
from typing import Any, Dict, List, Optional

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import Executable

from notification_service.core.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class DatabaseError(Exception):
    """Infrastructure failure raised by the database layer (connectivity, SQL, constraints)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _error_text(exc: Exception) -> str:
    # Prefer the driver's own message over SQLAlchemy's decorated one
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


class Database:
    def __init__(self, settings: Settings):
        url = settings.async_database_url
        engine_kwargs: Dict[str, Any] = {"pool_pre_ping": True}
        if make_url(url).get_backend_name() == "postgresql":
            engine_kwargs["pool_size"] = settings.DB_POOL_SIZE
            engine_kwargs["max_overflow"] = settings.DB_MAX_OVERFLOW
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

    async def fetch_all(self, statement: Executable) -> List[Dict[str, Any]]:
        """
        Execute one statement on a pooled connection and commit.
        Returns the result rows as column -> value dicts (empty when the
        statement returns no rows).
        """
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(statement)
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings().all()]
        except Exception as e:
            raise DatabaseError(_error_text(e)) from e

    async def fetch_one(self, statement: Executable) -> Optional[Dict[str, Any]]:
        rows = await self.fetch_all(statement)
        return rows[0] if rows else None

    async def create_tables(self):
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception as e:
            raise DatabaseError(_error_text(e)) from e
        logger.info("[Database] Tables ensured.")

    async def dispose(self):
        await self.engine.dispose()
        logger.info("[Database] Connection pool closed.")


def get_db(request: Request) -> Database:
    return request.app.state.db
