import asyncio

import pytest
from sqlalchemy import select, text

from notification_service.core.db import Database, DatabaseError
from notification_service.modules.notifications import schemas, service
from tests.conftest import make_settings


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'gateway.db'}"


def test_rows_come_back_as_dicts(db_url):
    async def scenario():
        db = Database(make_settings(db_url))
        try:
            await db.create_tables()
            created = await service.create_notification(
                db, schemas.NotificationCreate(account_id=3, message="hello")
            )
            rows = await db.fetch_all(select(service.notifications))
            return created, rows
        finally:
            await db.dispose()

    created, rows = run(scenario())

    assert created == {
        "notification_id": created["notification_id"],
        "account_id": 3,
        "message": "hello",
        "channel": "email",
        "status": "pending",
    }
    assert rows == [created]


def test_statement_without_rows_returns_empty_list(db_url):
    async def scenario():
        db = Database(make_settings(db_url))
        try:
            return await db.fetch_all(text("CREATE TABLE scratch (id INTEGER)"))
        finally:
            await db.dispose()

    assert run(scenario()) == []


def test_fetch_one_returns_none_when_nothing_matches(db_url):
    async def scenario():
        db = Database(make_settings(db_url))
        try:
            await db.create_tables()
            return await service.update_status(db, 404, "sent")
        finally:
            await db.dispose()

    assert run(scenario()) is None


def test_sql_errors_become_database_errors(db_url):
    async def scenario():
        db = Database(make_settings(db_url))
        try:
            await db.fetch_all(text("SELECT * FROM no_such_table"))
        finally:
            await db.dispose()

    with pytest.raises(DatabaseError) as excinfo:
        run(scenario())

    assert "no such table: no_such_table" in str(excinfo.value)
    assert excinfo.value.__cause__ is not None


def test_parameters_are_bound_not_interpolated(db_url):
    hostile = "x'); DROP TABLE notifications; --"

    async def scenario():
        db = Database(make_settings(db_url))
        try:
            await db.create_tables()
            await service.create_notification(db, schemas.NotificationCreate(account_id=1, message=hostile))
            return await service.list_notifications(db)
        finally:
            await db.dispose()

    rows = run(scenario())
    assert [row["message"] for row in rows] == [hostile]
