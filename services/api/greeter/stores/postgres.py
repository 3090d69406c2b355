"""PostgreSQL store with async SQLAlchemy.

Handles:
- Engine creation (asyncpg driver, client-side pooling)
- Liveness check (SELECT 1 round-trip, not just an open socket)
- Engine disposal
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from greeter.settings import Settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""

    pass


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine.

    No connection is opened here; the first ping does that.
    """
    return create_async_engine(
        settings.async_database_url,
        echo=settings.debug,
        connect_args=settings.asyncpg_connect_args,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
    )


async def ping_db(engine: AsyncEngine) -> None:
    """Confirm the database answers a query.

    Raises:
        Whatever the driver raises when the server is unreachable or refuses us.
    """
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def close_db(engine: AsyncEngine | None) -> None:
    """Close database connection pool."""
    if engine is not None:
        await engine.dispose()
