"""Redis store for the visit counter.

Handles:
- Client creation and liveness check (PING)
- Atomic counter operations (INCR / SET)

The counter has no durability guarantee: losing Redis loses the count.
"""

import redis.asyncio as redis
from redis.exceptions import RedisError

from greeter.settings import Settings
from greeter.stores import CacheStoreError

# Key for the visit counter
VISITS_KEY = "visits"


def create_redis_client(settings: Settings) -> redis.Redis:
    """Create a Redis client. Connections are opened lazily by the pool."""
    return redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )


async def ping_redis(client: redis.Redis) -> None:
    """Validate connectivity with a PING round-trip."""
    await client.ping()


async def close_redis(client: redis.Redis | None) -> None:
    """Close Redis connection."""
    if client is not None:
        await client.aclose()


# ============================================================
# Visit counter
# ============================================================


async def incr_visits(client: redis.Redis) -> int:
    """Increment the visit counter and return the new value.

    INCR is atomic server-side, so concurrent callers never lose or share a
    count.

    Raises:
        CacheStoreError: If Redis is unreachable or rejects the command.
    """
    try:
        return int(await client.incr(VISITS_KEY))
    except (RedisError, OSError) as e:
        raise CacheStoreError.from_exc(e) from e


async def reset_visits(client: redis.Redis) -> None:
    """Overwrite the visit counter with zero (plain SET, no read first).

    Raises:
        CacheStoreError: If Redis is unreachable or rejects the command.
    """
    try:
        await client.set(VISITS_KEY, 0)
    except (RedisError, OSError) as e:
        raise CacheStoreError.from_exc(e) from e
