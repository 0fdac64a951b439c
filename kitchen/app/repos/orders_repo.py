"""Repository interface for order operations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ..domain import Menu, Order


class OrdersRepo(ABC):
    """Contract for order persistence.

    Implementations are the only code allowed to mutate persisted orders and
    must re-check table and menu validity on every write. Each stored order is
    one atomicity unit: its record and its index entry appear together or not
    at all.
    """

    name = "abstract"

    @abstractmethod
    async def store_orders(self, table_id: int, orders: Sequence[Order]) -> list[Order]:
        """Persist ``orders`` for ``table_id`` and return the rejected ones.

        Raises ``InvalidTable`` without writing anything when the table is
        unknown. Orders referencing an unknown menu item leave no trace.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_orders(self, table_id: int) -> list[Order]:
        """Return the table's orders ordered by ``created_at`` then id."""
        raise NotImplementedError

    @abstractmethod
    async def remove_order(self, table_id: int, order_id: str) -> Order:
        """Delete an order and return it as it was just before removal."""
        raise NotImplementedError

    @abstractmethod
    async def list_menus(self) -> list[Menu]:
        """Return all menu items ordered by id."""
        raise NotImplementedError

    async def seed_catalog(self) -> None:
        """Copy the catalog into storage when the backend keeps its own copy."""

    async def ping(self) -> bool:
        """Return ``True`` when the backing store is reachable."""
        return True

    async def close(self) -> None:
        """Release any resources held by the repository."""
