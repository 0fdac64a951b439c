"""Table order routes: place, list and cancel."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from .deps import get_kitchen, get_request_timeout
from .routes_metrics import (
    orders_cancelled_total,
    orders_created_total,
    orders_rejected_total,
)
from .services.kitchen import Kitchen
from .utils.responses import ok

router = APIRouter(prefix="/orders")
logger = logging.getLogger("api")

MAX_ITEMS_PER_REQUEST = 100


class OrderRequest(BaseModel):
    """Menu items a table wants to order."""

    menu_ids: List[int] = Field(min_length=1, max_length=MAX_ITEMS_PER_REQUEST)


@router.post("/{table_id}")
async def create_orders(
    table_id: int,
    payload: OrderRequest,
    kitchen: Kitchen = Depends(get_kitchen),
    timeout: float | None = Depends(get_request_timeout),
) -> dict:
    """Place one order per menu id and return the rejected ones.

    An empty list means every item was accepted.
    """

    logger.info(
        "create order request with menus %s",
        ",".join(str(m) for m in payload.menu_ids),
        extra={"table_id": table_id},
    )
    result = await kitchen.place_orders(table_id, payload.menu_ids, timeout=timeout)
    orders_created_total.inc(len(result.accepted))
    orders_rejected_total.inc(len(result.rejected))
    return ok([order.model_dump(mode="json") for order in result.rejected])


@router.get("/{table_id}")
async def list_orders(
    table_id: int,
    kitchen: Kitchen = Depends(get_kitchen),
    timeout: float | None = Depends(get_request_timeout),
) -> dict:
    """Return the table's orders, oldest first."""

    orders = await kitchen.list_orders(table_id, timeout=timeout)
    return ok([order.model_dump(mode="json") for order in orders])


@router.delete("/{table_id}/{order_id}")
async def cancel_order(
    table_id: int,
    order_id: str,
    kitchen: Kitchen = Depends(get_kitchen),
    timeout: float | None = Depends(get_request_timeout),
) -> dict:
    """Remove an order and return it as it was before removal."""

    order = await kitchen.cancel_order(table_id, order_id, timeout=timeout)
    orders_cancelled_total.inc()
    return ok(order.model_dump(mode="json"))
