"""Redis-backed order repository.

Key layout, with ``P`` the configured key prefix:

* ``P:catalog:tables`` set of valid table ids
* ``P:catalog:menus`` hash of menu id to name
* ``P:orders:{table_id}`` sorted set of order ids scored by ``created_at``
* ``P:orders:{table_id}:{order_id}`` JSON encoded order record

Every order is written by one server-side script that checks the menu
against the stored catalog and only then writes the record and its index
entry. Redis runs the script atomically, so a rejected order is never
written and a cancelled call leaves each order either fully stored or absent.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Sequence

from redis.asyncio import Redis
from redis.exceptions import ConnectionError, TimeoutError, WatchError

from ..catalog import Catalog
from ..domain import Menu, Order
from ..errors import InvalidTable, OrderNotFound, StorageUnavailable
from ..repos.orders_repo import OrdersRepo

logger = logging.getLogger("kitchen.repo")

# Bound on optimistic retries when the index changes while it is being read.
MAX_WATCH_RETRIES = 16

# KEYS: menus hash, record, index. ARGV: menu id, record JSON, score, order id.
STORE_ORDER_SCRIPT = """
if redis.call("HEXISTS", KEYS[1], ARGV[1]) == 0 then
    return 0
end
redis.call("SET", KEYS[2], ARGV[2])
redis.call("ZADD", KEYS[3], ARGV[3], ARGV[4])
return 1
"""


@asynccontextmanager
async def storage_errors() -> AsyncIterator[None]:
    """Translate Redis transport failures into ``StorageUnavailable``."""

    try:
        yield
    except (ConnectionError, TimeoutError) as exc:
        raise StorageUnavailable(f"redis unavailable: {exc}") from exc


class RedisOrdersRepo(OrdersRepo):
    """Persist orders in Redis, one atomic script call per order.

    ``redis`` must be created with ``decode_responses=True``.
    """

    name = "redis"

    def __init__(self, redis: Redis, catalog: Catalog, prefix: str = "kitchen") -> None:
        self.redis = redis
        self.catalog = catalog
        self.prefix = prefix
        self._store_order = redis.register_script(STORE_ORDER_SCRIPT)

    # Keys

    @property
    def tables_key(self) -> str:
        return f"{self.prefix}:catalog:tables"

    @property
    def menus_key(self) -> str:
        return f"{self.prefix}:catalog:menus"

    def index_key(self, table_id: int) -> str:
        return f"{self.prefix}:orders:{table_id}"

    def record_key(self, table_id: int, order_id: str) -> str:
        return f"{self.prefix}:orders:{table_id}:{order_id}"

    # Catalog

    async def seed_catalog(self) -> None:
        """Write the catalog snapshot to Redis, replacing any previous copy."""

        async with storage_errors():
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.delete(self.tables_key, self.menus_key)
                pipe.sadd(self.tables_key, *sorted(self.catalog.tables))
                if self.catalog.menus:
                    pipe.hset(self.menus_key, mapping=dict(self.catalog.menus))
                await pipe.execute()
        logger.info(
            "seeded catalog with %d tables and %d menu items",
            len(self.catalog.tables),
            len(self.catalog.menus),
        )

    def _check_table(self, table_id: int) -> None:
        if not self.catalog.is_valid_table(table_id):
            raise InvalidTable(table_id)

    # Orders

    async def store_orders(self, table_id: int, orders: Sequence[Order]) -> list[Order]:
        self._check_table(table_id)
        rejected: list[Order] = []
        index_key = self.index_key(table_id)
        async with storage_errors():
            for order in orders:
                stored = await self._store_order(
                    keys=[self.menus_key, self.record_key(table_id, order.id), index_key],
                    args=[order.menu_id, order.model_dump_json(), order.created_at, order.id],
                )
                if stored:
                    continue
                logger.warning(
                    "rejected order %s: unknown menu %s",
                    order.id,
                    order.menu_id,
                    extra={"table_id": order.table_id},
                )
                rejected.append(order)
        return rejected

    async def get_orders(self, table_id: int) -> list[Order]:
        self._check_table(table_id)
        index_key = self.index_key(table_id)
        async with storage_errors():
            async with self.redis.pipeline(transaction=True) as pipe:
                for _ in range(MAX_WATCH_RETRIES):
                    try:
                        await pipe.watch(index_key)
                        order_ids = await pipe.zrange(index_key, 0, -1)
                        if not order_ids:
                            return []
                        pipe.multi()
                        pipe.mget([self.record_key(table_id, oid) for oid in order_ids])
                        (raws,) = await pipe.execute()
                        break
                    except WatchError:
                        continue
                else:
                    raise StorageUnavailable(
                        f"orders for table {table_id} kept changing while being read"
                    )
        return [Order.model_validate_json(raw) for raw in raws if raw is not None]

    async def remove_order(self, table_id: int, order_id: str) -> Order:
        self._check_table(table_id)
        async with storage_errors():
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.get(self.record_key(table_id, order_id))
                pipe.zrem(self.index_key(table_id), order_id)
                pipe.delete(self.record_key(table_id, order_id))
                raw, _, _ = await pipe.execute()
        if raw is None:
            raise OrderNotFound(table_id, order_id)
        return Order.model_validate_json(raw)

    async def list_menus(self) -> list[Menu]:
        async with storage_errors():
            menus = await self.redis.hgetall(self.menus_key)
        return sorted(
            (Menu(id=int(menu_id), name=name) for menu_id, name in menus.items()),
            key=lambda menu: menu.id,
        )

    async def ping(self) -> bool:
        async with storage_errors():
            return bool(await self.redis.ping())

    async def close(self) -> None:
        await self.redis.aclose(close_connection_pool=True)
