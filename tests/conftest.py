import pytest
from fastapi.testclient import TestClient

from notification_service.core.config import Settings
from notification_service.main import create_app

API_KEY = "test-service-key"


def make_settings(database_url: str, **overrides) -> Settings:
    values = {
        "DATABASE_URL": database_url,
        "SERVICE_API_KEY": API_KEY,
        "DB_CREATE_TABLES": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path):
    return make_settings(f"sqlite+aiosqlite:///{tmp_path / 'notifications.db'}")


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def unreachable_db_url(tmp_path):
    # SQLite cannot create a file inside a directory that does not exist
    return f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'notifications.db'}"


@pytest.fixture
def broken_client(unreachable_db_url):
    settings = make_settings(unreachable_db_url, DB_CREATE_TABLES=False)
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def create(client):
    def _create(**body):
        payload = {"account_id": 42, "message": "hi"}
        payload.update(body)
        response = client.post("/notifications", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["notification"]

    return _create
