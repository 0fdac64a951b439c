"""Redis-backed repository implementations."""

from .orders_repo_redis import RedisOrdersRepo, storage_errors

__all__ = ["RedisOrdersRepo", "storage_errors"]
