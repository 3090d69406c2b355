"""Shared fixtures.

Postgres is stood in for by SQLite (aiosqlite) on a temp file; Redis by a
small in-memory async fake with the handful of commands the service uses.
"""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.ext.asyncio import create_async_engine

from greeter.main import create_app
from greeter.settings import Settings
from greeter.stores import StoreHandles


class FakeRedis:
    """In-memory stand-in for redis.asyncio.Redis (decode_responses=True)."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.fail = False
        self.closed = False
        self.pings = 0

    def _check(self) -> None:
        if self.fail:
            raise RedisConnectionError("Error 111 connecting to redis:6379.")

    async def ping(self) -> bool:
        self.pings += 1
        self._check()
        return True

    async def incr(self, key: str) -> int:
        await asyncio.sleep(0)
        self._check()
        value = int(self.data.get(key, "0")) + 1
        self.data[key] = str(value)
        return value

    async def set(self, key: str, value: object) -> bool:
        self._check()
        self.data[key] = str(value)
        return True

    async def get(self, key: str) -> str | None:
        self._check()
        return self.data.get(key)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, db_connect_attempts=5, db_connect_interval_s=2.0)


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
async def engine(tmp_path):
    """File-backed SQLite engine (one database shared by all connections)."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'greeter.db'}")
    yield engine
    await engine.dispose()


@pytest.fixture
def handles(engine, fake_redis) -> StoreHandles:
    return StoreHandles(engine=engine, redis=fake_redis)


@pytest.fixture
def app(settings, handles):
    """App with handles published directly (lifespan is not run by ASGITransport)."""
    app = create_app(settings)
    app.state.store_handles = handles
    return app


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
