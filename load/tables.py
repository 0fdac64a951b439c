"""Table allocation for the load client."""

import itertools


class TableAllocator:
    """Hand out each table id at most once.

    Two users sharing a table would see each other's orders, which breaks the
    per-table order count check in ``locustfile.py``.
    """

    def __init__(self, max_table: int) -> None:
        self.max_table = max_table
        self._ids = itertools.count(1)

    def claim(self) -> int | None:
        """Return an unused table id, or ``None`` once all are taken."""
        table_id = next(self._ids)
        return table_id if table_id <= self.max_table else None
