"""Data stores for persistence and counting.

Stores handle:
- PostgreSQL: async engine, liveness check, disposal
- Redis: client, liveness check, the visit counter

Both live handles travel together in StoreHandles, built once at startup by
the bootstrap sequence and released at shutdown. Errors raised while serving
a request are wrapped per store so the two error domains stay apart.
"""

from dataclasses import dataclass

import redis.asyncio as redis
from sqlalchemy.ext.asyncio import AsyncEngine


class StoreError(RuntimeError):
    """A store call failed while serving a request.

    Only the failure kind (exception class name) is kept; driver messages may
    carry connection details and never leave the process.
    """

    store = "store"

    def __init__(self, kind: str) -> None:
        super().__init__(f"{self.store} error: {kind}")
        self.kind = kind

    @classmethod
    def from_exc(cls, exc: BaseException) -> "StoreError":
        return cls(type(exc).__name__)


class RelationalStoreError(StoreError):
    store = "postgres"


class CacheStoreError(StoreError):
    store = "redis"


@dataclass(frozen=True)
class StoreHandles:
    """Live, bootstrap-verified handles to both stores.

    Read-only after publication; safe to share between concurrent requests
    (the engine and the Redis client pool connections internally).
    """

    engine: AsyncEngine
    redis: redis.Redis

    async def aclose(self) -> None:
        """Release both stores. Redis first, reverse of the connect order."""
        try:
            await self.redis.aclose()
        finally:
            await self.engine.dispose()


__all__ = [
    "CacheStoreError",
    "RelationalStoreError",
    "StoreError",
    "StoreHandles",
]
