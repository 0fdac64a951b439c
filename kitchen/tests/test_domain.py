import pytest
from pydantic import ValidationError

from kitchen.app.domain import Order, OrderStatus, new_order_id


def test_order_ids_are_unique_and_time_sortable():
    ids = [new_order_id() for _ in range(5000)]

    assert len(set(ids)) == len(ids)
    assert ids == sorted(ids)


def test_order_id_is_uuid_v7():
    import uuid

    assert uuid.UUID(new_order_id()).version == 7


def test_order_defaults_and_wire_format():
    order = Order(id="a", table_id=1, menu_id=2, created_at=10, processing_time=60)

    assert order.status is OrderStatus.PROCESSING
    assert order.model_dump(mode="json") == {
        "id": "a",
        "table_id": 1,
        "menu_id": 2,
        "created_at": 10,
        "processing_time": 60,
        "status": "PROCESSING",
    }


def test_order_rejects_non_positive_processing_time():
    with pytest.raises(ValidationError):
        Order(id="a", table_id=1, menu_id=2, created_at=10, processing_time=0)


def test_order_is_immutable():
    order = Order(id="a", table_id=1, menu_id=2, created_at=10, processing_time=60)

    with pytest.raises(ValidationError):
        order.status = OrderStatus.READY
