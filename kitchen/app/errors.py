"""Error taxonomy shared by the repositories, the service and the API."""

from __future__ import annotations


class KitchenError(Exception):
    """Base class for failures reported to callers.

    ``code`` is the stable machine readable identifier placed in error
    envelopes and ``status_code`` the HTTP status used when the error escapes
    a route handler.
    """

    code = "KITCHEN_ERROR"
    status_code = 500

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message())

    def default_message(self) -> str:
        return self.code.replace("_", " ").lower()

    @property
    def message(self) -> str:
        return str(self)


class InvalidTable(KitchenError):
    """The table id is not part of the catalog."""

    code = "INVALID_TABLE"
    status_code = 404

    def __init__(self, table_id: int) -> None:
        self.table_id = table_id
        super().__init__(f"table {table_id} is invalid")


class InvalidMenuItem(KitchenError):
    """The menu id is not part of the catalog."""

    code = "INVALID_MENU_ITEM"
    status_code = 422

    def __init__(self, menu_id: int) -> None:
        self.menu_id = menu_id
        super().__init__(f"menu item {menu_id} is invalid")


class OrderNotFound(KitchenError):
    """No order with the given id exists for the table."""

    code = "ORDER_NOT_FOUND"
    status_code = 404

    def __init__(self, table_id: int, order_id: str) -> None:
        self.table_id = table_id
        self.order_id = order_id
        super().__init__(f"order {order_id} not found for table {table_id}")


class StorageUnavailable(KitchenError):
    """The backing store could not be reached; safe to retry later."""

    code = "STORAGE_UNAVAILABLE"
    status_code = 503


__all__ = [
    "KitchenError",
    "InvalidTable",
    "InvalidMenuItem",
    "OrderNotFound",
    "StorageUnavailable",
]
