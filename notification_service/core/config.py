from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

DEFAULT_SERVICE_API_KEY = "banking-shared-key"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROJECT_NAME: str = "Notification Service"
    SERVICE_NAME: str = "notification-service"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = Field(default=8084, ge=1, le=65535)
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # Database
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "notifications"
    DATABASE_URL: Optional[str] = None
    DB_POOL_SIZE: int = Field(default=5, ge=1)
    DB_MAX_OVERFLOW: int = Field(default=10, ge=0)
    DB_CREATE_TABLES: bool = False

    # Inter-service auth
    SERVICE_API_KEY: str = DEFAULT_SERVICE_API_KEY

    # 500 bodies carry the raw database error text when enabled
    EXPOSE_ERROR_DETAILS: bool = True

    @property
    def async_database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        # URL.create escapes reserved characters in the credentials
        url = URL.create(
            drivername="postgresql+asyncpg",
            username=self.DB_USER,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )
        return url.render_as_string(hide_password=False)

    @property
    def uses_default_api_key(self) -> bool:
        return self.SERVICE_API_KEY == DEFAULT_SERVICE_API_KEY


@lru_cache()
def get_settings() -> Settings:
    """Settings are read once per process."""
    return Settings()
