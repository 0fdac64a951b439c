from __future__ import annotations

import asyncio

import pytest

from kitchen.app.domain import OrderStatus
from kitchen.app.errors import InvalidTable, OrderNotFound, StorageUnavailable
from kitchen.app.repos import MemoryOrdersRepo
from kitchen.app.services.kitchen import Kitchen, processing_time_policy

pytestmark = pytest.mark.anyio


class SpyRepo(MemoryOrdersRepo):
    """Memory repository counting calls that reach storage."""

    def __init__(self, catalog) -> None:
        super().__init__(catalog)
        self.calls = 0

    async def store_orders(self, table_id, orders):
        self.calls += 1
        return await super().store_orders(table_id, orders)


class SlowRepo(MemoryOrdersRepo):
    async def get_orders(self, table_id):
        await asyncio.sleep(1)
        return []


@pytest.fixture
def kitchen(catalog):
    return Kitchen(
        catalog,
        SpyRepo(catalog),
        processing_time=processing_time_policy(5, 14),
        clock=lambda: 1_700_000_123.9,
    )


async def test_place_orders_stamps_candidates(kitchen) -> None:
    result = await kitchen.place_orders(1, [1, 2, 3])

    assert result.rejected == []
    assert [o.menu_id for o in result.accepted] == [1, 2, 3]
    for order in result.accepted:
        assert order.table_id == 1
        assert order.created_at == 1_700_000_123
        assert order.status is OrderStatus.PROCESSING
        assert 300 <= order.processing_time <= 840
        assert order.processing_time % 60 == 0
    assert len({o.id for o in result.accepted}) == 3


async def test_place_orders_splits_rejected(kitchen) -> None:
    result = await kitchen.place_orders(1, [1, 2, 999])

    assert [o.menu_id for o in result.accepted] == [1, 2]
    assert [o.menu_id for o in result.rejected] == [999]
    assert await kitchen.list_orders(1) == result.accepted


async def test_invalid_table_fails_before_storage(kitchen) -> None:
    with pytest.raises(InvalidTable):
        await kitchen.place_orders(9999, [1])

    assert kitchen.repo.calls == 0
    with pytest.raises(InvalidTable):
        await kitchen.list_orders(9999)
    with pytest.raises(InvalidTable):
        await kitchen.cancel_order(9999, "x")


async def test_cancel_order_hard_deletes(kitchen) -> None:
    result = await kitchen.place_orders(2, [5, 6])
    target = result.accepted[0]

    removed = await kitchen.cancel_order(2, target.id)

    assert removed == target
    assert removed.status is OrderStatus.PROCESSING
    assert await kitchen.list_orders(2) == result.accepted[1:]
    with pytest.raises(OrderNotFound):
        await kitchen.cancel_order(2, target.id)


async def test_fixed_processing_time(catalog) -> None:
    kitchen = Kitchen(catalog, MemoryOrdersRepo(catalog), processing_time_policy(7, 7))

    result = await kitchen.place_orders(1, [1, 1])

    assert {o.processing_time for o in result.accepted} == {420}


async def test_deadline_raises_storage_unavailable(catalog) -> None:
    kitchen = Kitchen(catalog, SlowRepo(catalog))

    with pytest.raises(StorageUnavailable):
        await kitchen.list_orders(1, timeout=0.01)


async def test_list_menus_delegates(kitchen, catalog) -> None:
    assert await kitchen.list_menus() == catalog.list_menus()
