"""Greeting read and reset against PostgreSQL.

Read path:
- Take the first greeting by id
- No row, or no greetings table at all, is the placeholder path (not an error)

Reset path (drop -> create -> seed):
- Each step commits on its own, so a failure midway leaves the earlier steps
  applied (e.g. an empty table). The read path tolerates every such state.
"""

import logging

from sqlalchemy import inspect, insert, select
from sqlalchemy.exc import OperationalError, ProgrammingError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from greeter.models import Greeting
from greeter.stores import RelationalStoreError

PLACEHOLDER_MESSAGE = "No greeting configured yet. Visit /init-db to create one."
SEED_MESSAGE = "Hello from the PostgreSQL database, served by FastAPI!"

logger = logging.getLogger("uvicorn.error")


async def fetch_greeting(engine: AsyncEngine) -> str:
    """Read the greeting message.

    Returns:
        The first greeting's message, or PLACEHOLDER_MESSAGE if there is none.

    Raises:
        RelationalStoreError: On connectivity failures or a row without message.
    """
    query = select(Greeting.message).order_by(Greeting.id).limit(1)
    try:
        async with engine.connect() as conn:
            row = (await conn.execute(query)).first()
    except (ProgrammingError, OperationalError) as e:
        # Fresh database, or a reset that stopped right after the drop.
        if not await _greetings_table_exists(engine):
            return PLACEHOLDER_MESSAGE
        raise RelationalStoreError.from_exc(e) from e
    except (SQLAlchemyError, OSError) as e:
        raise RelationalStoreError.from_exc(e) from e

    if row is None:
        return PLACEHOLDER_MESSAGE
    if row.message is None:
        raise RelationalStoreError("NullGreetingMessage")
    return row.message


async def _greetings_table_exists(engine: AsyncEngine) -> bool:
    def _has_table(sync_conn) -> bool:
        return inspect(sync_conn).has_table(Greeting.__tablename__)

    try:
        async with engine.connect() as conn:
            return await conn.run_sync(_has_table)
    except (SQLAlchemyError, OSError) as e:
        raise RelationalStoreError.from_exc(e) from e


async def reset_greetings(engine: AsyncEngine) -> None:
    """Drop and recreate the greetings table, then seed exactly one row.

    Raises:
        RelationalStoreError: On the first failing step; later steps are skipped.
    """
    table = Greeting.__table__
    try:
        async with engine.begin() as conn:
            await conn.run_sync(table.drop, checkfirst=True)
        async with engine.begin() as conn:
            await conn.run_sync(table.create)
        async with engine.begin() as conn:
            await conn.execute(insert(Greeting).values(message=SEED_MESSAGE))
    except (SQLAlchemyError, OSError) as e:
        raise RelationalStoreError.from_exc(e) from e

    logger.info("Greetings table recreated and seeded")
