"""Order service: turn table and menu ids into orders and persist them."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, TypeVar

from ..catalog import Catalog
from ..domain import Menu, Order, OrderStatus, new_order_id
from ..errors import InvalidTable, StorageUnavailable
from ..repos import OrdersRepo

logger = logging.getLogger("kitchen.service")

T = TypeVar("T")


@dataclass
class PlacementResult:
    """Outcome of :meth:`Kitchen.place_orders`."""

    accepted: list[Order] = field(default_factory=list)
    rejected: list[Order] = field(default_factory=list)


def processing_time_policy(min_minutes: int, max_minutes: int) -> Callable[[], int]:
    """Return a callable producing processing estimates in seconds.

    Estimates are whole minutes drawn uniformly from ``min_minutes`` to
    ``max_minutes`` inclusive. Equal bounds give a fixed estimate.
    """

    def _estimate() -> int:
        return random.randint(min_minutes, max_minutes) * 60

    return _estimate


class Kitchen:
    """Validate requests against the catalog and delegate to the repository."""

    def __init__(
        self,
        catalog: Catalog,
        repo: OrdersRepo,
        processing_time: Callable[[], int] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.catalog = catalog
        self.repo = repo
        self.processing_time = processing_time or processing_time_policy(5, 14)
        self.clock = clock

    def _check_table(self, table_id: int) -> None:
        if not self.catalog.is_valid_table(table_id):
            raise InvalidTable(table_id)

    async def _bounded(self, call: Awaitable[T], timeout: float | None) -> T:
        if not timeout:
            return await call
        try:
            return await asyncio.wait_for(call, timeout)
        except asyncio.TimeoutError as exc:
            raise StorageUnavailable("deadline exceeded") from exc

    def build_orders(self, table_id: int, menu_ids: Iterable[int]) -> list[Order]:
        """Stamp a fresh ``PROCESSING`` order for every menu id."""

        now = int(self.clock())
        return [
            Order(
                id=new_order_id(),
                table_id=table_id,
                menu_id=menu_id,
                created_at=now,
                processing_time=self.processing_time(),
                status=OrderStatus.PROCESSING,
            )
            for menu_id in menu_ids
        ]

    async def place_orders(
        self, table_id: int, menu_ids: Iterable[int], timeout: float | None = None
    ) -> PlacementResult:
        """Create one order per menu id for ``table_id``.

        Orders for unknown menu items are not stored and come back in
        ``PlacementResult.rejected``; the rest are in ``accepted``.
        """

        self._check_table(table_id)
        candidates = self.build_orders(table_id, menu_ids)
        rejected = await self._bounded(self.repo.store_orders(table_id, candidates), timeout)
        rejected_ids = {order.id for order in rejected}
        accepted = [order for order in candidates if order.id not in rejected_ids]
        logger.info(
            "table %s placed %d orders, %d rejected",
            table_id,
            len(accepted),
            len(rejected),
            extra={"table_id": table_id},
        )
        return PlacementResult(accepted=accepted, rejected=rejected)

    async def list_orders(self, table_id: int, timeout: float | None = None) -> list[Order]:
        self._check_table(table_id)
        return await self._bounded(self.repo.get_orders(table_id), timeout)

    async def cancel_order(
        self, table_id: int, order_id: str, timeout: float | None = None
    ) -> Order:
        """Remove an order from the table and return it."""

        self._check_table(table_id)
        order = await self._bounded(self.repo.remove_order(table_id, order_id), timeout)
        logger.info("table %s cancelled order %s", table_id, order_id, extra={"table_id": table_id})
        return order

    async def list_menus(self, timeout: float | None = None) -> list[Menu]:
        return await self._bounded(self.repo.list_menus(), timeout)
