"""Startup bootstrap: connect and verify both stores before serving.

Order and policy:
1. PostgreSQL - up to RetryPolicy.max_attempts attempts, fixed sleep between
   them (the database container is often still starting).
2. Redis - exactly one attempt, only after Postgres is connected. No retry.

Each attempt includes a liveness round-trip (SELECT 1 / PING). Failures are
logged by kind only; connection URLs and driver messages carry credentials.

bootstrap() never exits the process. It returns StoreHandles or a
BootstrapFailure, and the caller decides how to stop.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
import logging

import redis.asyncio as redis
from sqlalchemy.ext.asyncio import AsyncEngine

from greeter.settings import Settings
from greeter.stores import StoreHandles
from greeter.stores.postgres import close_db, create_engine, ping_db
from greeter.stores.redis import close_redis, create_redis_client, ping_redis

logger = logging.getLogger("uvicorn.error")

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed attempt bound and fixed interval (no backoff)."""

    max_attempts: int = 5
    interval_s: float = 2.0

    @classmethod
    def from_settings(cls, settings: Settings) -> RetryPolicy:
        return cls(
            max_attempts=settings.db_connect_attempts,
            interval_s=settings.db_connect_interval_s,
        )


class BootstrapError(RuntimeError):
    def __init__(self, store: str, kind: str, attempts: int) -> None:
        super().__init__(f"{store} unavailable after {attempts} attempt(s): {kind}")
        self.store = store
        self.kind = kind
        self.attempts = attempts


@dataclass(frozen=True)
class BootstrapFailure:
    """Terminal startup failure: nothing may be served."""

    store: str
    kind: str
    attempts: int


async def connect_postgres(
    settings: Settings,
    *,
    policy: RetryPolicy | None = None,
    sleep: Sleep = asyncio.sleep,
    engine_factory: Callable[[Settings], AsyncEngine] = create_engine,
    ping: Callable[[AsyncEngine], Awaitable[None]] = ping_db,
) -> AsyncEngine:
    """Open a verified engine, retrying with a fixed interval.

    Returns:
        The engine from the first attempt whose liveness check passed.

    Raises:
        BootstrapError: When every attempt failed.
    """
    policy = policy or RetryPolicy.from_settings(settings)
    last_kind = "NoAttempt"

    for attempt in range(1, policy.max_attempts + 1):
        engine: AsyncEngine | None = None
        try:
            engine = engine_factory(settings)
            await ping(engine)
        except Exception as e:
            last_kind = type(e).__name__
            logger.warning(
                f"[bootstrap] Postgres not ready attempt={attempt}/{policy.max_attempts} kind={last_kind}"
            )
            await close_db(engine)
            if attempt < policy.max_attempts:
                await sleep(policy.interval_s)
            continue

        logger.info(f"Postgres connected attempt={attempt}/{policy.max_attempts}")
        return engine

    raise BootstrapError("postgres", last_kind, policy.max_attempts)


async def connect_redis(
    settings: Settings,
    *,
    client_factory: Callable[[Settings], redis.Redis] = create_redis_client,
    ping: Callable[[redis.Redis], Awaitable[None]] = ping_redis,
) -> redis.Redis:
    """Open a verified Redis client. Single attempt.

    Raises:
        BootstrapError: If the client cannot be created or PING fails.
    """
    client: redis.Redis | None = None
    try:
        client = client_factory(settings)
        await ping(client)
    except Exception as e:
        kind = type(e).__name__
        logger.error(f"[bootstrap] Redis unreachable kind={kind}")
        await close_redis(client)
        raise BootstrapError("redis", kind, 1) from e

    logger.info("Redis connected")
    return client


async def bootstrap(
    settings: Settings,
    *,
    policy: RetryPolicy | None = None,
    sleep: Sleep = asyncio.sleep,
    engine_factory: Callable[[Settings], AsyncEngine] = create_engine,
    redis_factory: Callable[[Settings], redis.Redis] = create_redis_client,
) -> StoreHandles | BootstrapFailure:
    """Connect Postgres, then Redis.

    Returns:
        StoreHandles when both stores passed their liveness check, otherwise
        a BootstrapFailure naming the store that failed. Nothing stays open
        on failure.
    """
    try:
        engine = await connect_postgres(
            settings,
            policy=policy,
            sleep=sleep,
            engine_factory=engine_factory,
        )
    except BootstrapError as e:
        return BootstrapFailure(store=e.store, kind=e.kind, attempts=e.attempts)

    try:
        client = await connect_redis(settings, client_factory=redis_factory)
    except BootstrapError as e:
        await close_db(engine)
        return BootstrapFailure(store=e.store, kind=e.kind, attempts=e.attempts)

    return StoreHandles(engine=engine, redis=client)
