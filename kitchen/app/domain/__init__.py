"""Domain models and helpers."""

from .order import Menu, Order, OrderStatus, new_order_id

__all__ = ["Menu", "Order", "OrderStatus", "new_order_id"]
