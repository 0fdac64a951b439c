"""Menu listing routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from .deps import get_kitchen, get_request_timeout
from .services.kitchen import Kitchen
from .utils.responses import ok

router = APIRouter()


@router.get("/menus")
async def list_menus(
    kitchen: Kitchen = Depends(get_kitchen),
    timeout: float | None = Depends(get_request_timeout),
) -> dict:
    """Return every menu item as ``[id, name]`` pairs ordered by id."""

    menus = await kitchen.list_menus(timeout=timeout)
    return ok([[menu.id, menu.name] for menu in menus])
