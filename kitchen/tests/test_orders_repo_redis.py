"""Redis specific behaviour: key layout, atomic writes and transport errors."""

from __future__ import annotations

import asyncio
import contextlib
import json

import pytest
from redis.asyncio import Redis
from redis.asyncio.retry import Retry
from redis.backoff import NoBackoff

from kitchen.app.catalog import build_catalog
from kitchen.app.domain import Order
from kitchen.app.errors import StorageUnavailable
from kitchen.app.repos_redis import RedisOrdersRepo
from order_factory import make_order

pytestmark = pytest.mark.anyio


@pytest.fixture
async def redis_repo(fake_redis, catalog):
    repo = RedisOrdersRepo(fake_redis, catalog, prefix="kt")
    await repo.seed_catalog()
    yield repo
    await repo.close()


async def test_seed_catalog_writes_tables_and_menus(redis_repo, fake_redis, catalog) -> None:
    assert await fake_redis.scard("kt:catalog:tables") == len(catalog.tables)
    assert await fake_redis.sismember("kt:catalog:tables", "1")
    assert await fake_redis.hget("kt:catalog:menus", "1") == catalog.menus[1]


async def test_seed_catalog_replaces_previous_copy(fake_redis) -> None:
    await RedisOrdersRepo(fake_redis, build_catalog(50), prefix="kt").seed_catalog()
    await RedisOrdersRepo(fake_redis, build_catalog(5, ["Tuna"]), prefix="kt").seed_catalog()

    assert await fake_redis.scard("kt:catalog:tables") == 5
    assert await fake_redis.hgetall("kt:catalog:menus") == {"1": "Tuna"}


async def test_store_writes_record_and_index(redis_repo, fake_redis) -> None:
    order = make_order(1, 4, created_at=1234)

    await redis_repo.store_orders(1, [order])

    assert await fake_redis.zscore("kt:orders:1", order.id) == 1234
    record = json.loads(await fake_redis.get(f"kt:orders:1:{order.id}"))
    assert record["menu_id"] == 4
    assert record["status"] == "PROCESSING"


async def test_menu_check_uses_stored_catalog(redis_repo, fake_redis) -> None:
    await fake_redis.hdel("kt:catalog:menus", "2")
    order = make_order(1, 2)

    assert await redis_repo.store_orders(1, [order]) == [order]
    assert await fake_redis.keys("kt:orders:*") == []


async def test_remove_returns_stored_record(redis_repo) -> None:
    order = make_order(2, 3)
    await redis_repo.store_orders(2, [order])

    removed = await redis_repo.remove_order(2, order.id)

    assert isinstance(removed, Order)
    assert removed == order
    assert await redis_repo.get_orders(2) == []


async def test_cancelled_store_never_leaves_rejected_orders(redis_repo, fake_redis) -> None:
    for yields in range(6):
        for _ in range(10):
            task = asyncio.ensure_future(
                redis_repo.store_orders(3, [make_order(3, 999), make_order(3, 1)])
            )
            for _ in range(yields):
                await asyncio.sleep(0)
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    stored = await redis_repo.get_orders(3)
    assert all(order.menu_id == 1 for order in stored)
    records = await fake_redis.keys("kt:orders:3:*")
    assert len(records) == len(stored)
    assert await fake_redis.zcard("kt:orders:3") == len(stored)


async def test_unreachable_server_raises_storage_unavailable(catalog) -> None:
    client = Redis.from_url(
        "redis://127.0.0.1:1/0",
        decode_responses=True,
        socket_connect_timeout=0.2,
        retry=Retry(NoBackoff(), 0),
    )
    repo = RedisOrdersRepo(client, catalog)

    with pytest.raises(StorageUnavailable):
        await repo.store_orders(1, [make_order(1, 1)])
    with pytest.raises(StorageUnavailable):
        await repo.get_orders(1)
    with pytest.raises(StorageUnavailable):
        await repo.ping()
    await repo.close()
