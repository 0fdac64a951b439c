from __future__ import annotations

from redis.asyncio import BlockingConnectionPool, Redis
from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff
from redis.exceptions import ConnectionError, TimeoutError

from config import Settings


def create_redis_client(settings: Settings) -> Redis:
    """Return a Redis client backed by a shared blocking connection pool.

    Concurrent requests borrow connections from the pool and wait for one to
    free up once ``redis_max_connections`` are in use. Dropped connections are
    re-established with exponential backoff up to ``redis_retries`` times
    before the error reaches the caller.
    """

    pool = BlockingConnectionPool.from_url(
        settings.redis_url,
        max_connections=settings.redis_max_connections,
        decode_responses=True,
        retry=Retry(ExponentialBackoff(), settings.redis_retries),
        retry_on_error=[ConnectionError, TimeoutError],
    )
    return Redis(connection_pool=pool)
