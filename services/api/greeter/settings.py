"""Application settings via Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import URL


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Field names match the environment variables the container is started with
    (DB_HOST, POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_DB, REDIS_URL, ...).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Greeter API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # Database (PostgreSQL)
    db_host: str = "localhost"
    db_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: str = Field(default="postgres", repr=False)
    postgres_db: str = "greeter"
    database_url: str = Field(
        default="",
        repr=False,
        description="Full connection URL; overrides DB_HOST/POSTGRES_* when set",
    )
    postgres_ssl: bool = False

    # Startup retry for Postgres (fixed interval, no escalation)
    db_connect_attempts: int = Field(default=5, ge=1, le=100)
    db_connect_interval_s: float = Field(default=2.0, ge=0.0, le=60.0)

    @property
    def async_database_url(self) -> str:
        """Get database URL with asyncpg driver.

        A plain postgresql:// DATABASE_URL is rewritten to postgresql+asyncpg://.
        Without DATABASE_URL the URL is assembled from the DB_HOST/POSTGRES_*
        parts, with credentials escaped.
        """
        if self.database_url:
            url = self.database_url
            if url.startswith("postgresql://"):
                url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return url
        return URL.create(
            "postgresql+asyncpg",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.db_host,
            port=self.db_port,
            database=self.postgres_db,
        ).render_as_string(hide_password=False)

    @property
    def asyncpg_connect_args(self) -> dict[str, object]:
        """Extra connect args for asyncpg (SSL off unless POSTGRES_SSL is set)."""
        if self.postgres_ssl:
            return {}
        return {"ssl": False}

    # Redis
    redis_url: str = Field(default="redis://localhost:6379/0", repr=False)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
