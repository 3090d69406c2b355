from greeter.settings import Settings, get_settings


def test_database_url_built_from_parts_escapes_credentials() -> None:
    settings = Settings(
        _env_file=None,
        db_host="db",
        postgres_user="app",
        postgres_password="p@ss/word",
        postgres_db="greeter",
        db_port=5432,
        database_url="",
    )

    url = settings.async_database_url
    assert url.startswith("postgresql+asyncpg://app:")
    assert url.endswith("@db:5432/greeter")
    assert "p%40ss" in url


def test_plain_database_url_is_rewritten_to_asyncpg() -> None:
    settings = Settings(_env_file=None, database_url="postgresql://u:p@host:6543/name")

    assert settings.async_database_url == "postgresql+asyncpg://u:p@host:6543/name"


def test_reads_container_environment(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DB_PORT", raising=False)
    monkeypatch.setenv("DB_HOST", "postgres")
    monkeypatch.setenv("POSTGRES_USER", "greeter")
    monkeypatch.setenv("POSTGRES_DB", "greetings")
    monkeypatch.setenv("REDIS_URL", "redis://redis:6379/0")
    monkeypatch.setenv("DB_CONNECT_ATTEMPTS", "7")

    settings = Settings(_env_file=None)

    assert settings.db_host == "postgres"
    assert settings.redis_url == "redis://redis:6379/0"
    assert settings.db_connect_attempts == 7
    assert settings.async_database_url.endswith("@postgres:5432/greetings")


def test_ssl_disabled_by_default() -> None:
    assert Settings(_env_file=None).asyncpg_connect_args == {"ssl": False}
    assert Settings(_env_file=None, postgres_ssl=True).asyncpg_connect_args == {}


def test_credentials_not_in_repr() -> None:
    settings = Settings(_env_file=None, postgres_password="hunter2", redis_url="redis://:secret@r:6379")

    assert "hunter2" not in repr(settings)
    assert "secret" not in repr(settings)


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
