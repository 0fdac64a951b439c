"""In-process order repository.

Orders live in per-table dictionaries next to a list of ``(created_at, id)``
pairs kept sorted with :func:`bisect.insort`. None of the methods await while
mutating state, so each order's write is indivisible on the event loop and
tables never wait on each other.
"""

from __future__ import annotations

import logging
from bisect import insort
from collections import defaultdict
from typing import Sequence

from ..catalog import Catalog
from ..domain import Menu, Order
from ..errors import InvalidTable, OrderNotFound
from .orders_repo import OrdersRepo

logger = logging.getLogger("kitchen.repo")


class MemoryOrdersRepo(OrdersRepo):
    """Keep orders in memory for development and tests."""

    name = "memory"

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self._records: dict[int, dict[str, Order]] = defaultdict(dict)
        self._index: dict[int, list[tuple[int, str]]] = defaultdict(list)

    def _check_table(self, table_id: int) -> None:
        if not self.catalog.is_valid_table(table_id):
            raise InvalidTable(table_id)

    async def store_orders(self, table_id: int, orders: Sequence[Order]) -> list[Order]:
        self._check_table(table_id)
        rejected: list[Order] = []
        records = self._records[table_id]
        index = self._index[table_id]
        for order in orders:
            if not self.catalog.is_valid_menu(order.menu_id):
                logger.warning(
                    "rejected order %s: unknown menu %s",
                    order.id,
                    order.menu_id,
                    extra={"table_id": table_id},
                )
                rejected.append(order)
                continue
            previous = records.get(order.id)
            if previous is not None:
                index.remove((previous.created_at, previous.id))
            records[order.id] = order
            insort(index, (order.created_at, order.id))
        return rejected

    async def get_orders(self, table_id: int) -> list[Order]:
        self._check_table(table_id)
        records = self._records.get(table_id, {})
        return [records[order_id] for _, order_id in self._index.get(table_id, [])]

    async def remove_order(self, table_id: int, order_id: str) -> Order:
        self._check_table(table_id)
        records = self._records.get(table_id, {})
        order = records.pop(order_id, None)
        if order is None:
            raise OrderNotFound(table_id, order_id)
        self._index[table_id].remove((order.created_at, order.id))
        return order

    async def list_menus(self) -> list[Menu]:
        return self.catalog.list_menus()
