"""Order repositories and backend selection."""

from __future__ import annotations

from redis.asyncio import Redis

from config import Settings, StorageBackend

from ..catalog import Catalog
from .memory_orders_repo import MemoryOrdersRepo
from .orders_repo import OrdersRepo


def build_orders_repo(
    settings: Settings, catalog: Catalog, redis: Redis | None = None
) -> OrdersRepo:
    """Return the repository selected by ``settings.storage_backend``.

    ``redis`` is required for the Redis backend and ignored otherwise.
    """

    if settings.storage_backend is StorageBackend.MEMORY:
        return MemoryOrdersRepo(catalog)
    if redis is None:
        raise ValueError("redis client required for the redis storage backend")
    from ..repos_redis import RedisOrdersRepo

    return RedisOrdersRepo(redis, catalog, prefix=settings.key_prefix)


__all__ = ["OrdersRepo", "MemoryOrdersRepo", "build_orders_repo"]
