"""Liveness and readiness probe endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from .errors import StorageUnavailable
from .utils.responses import error_response

router = APIRouter()
logger = logging.getLogger("api")


@router.get("/hi", response_class=PlainTextResponse)
async def hi() -> str:
    """Return a static greeting while the process is up."""

    return "Hello, World!"


@router.get("/ready")
async def ready(request: Request):
    """Return readiness status after verifying the storage backend."""

    repo = request.app.state.repo
    try:
        alive = await repo.ping()
    except StorageUnavailable as exc:
        logger.warning("readiness check failed: %s", exc)
        alive = False
    if not alive:
        return error_response("READY_FAIL", "Readiness check failed", 503)
    return {"ok": True, "backend": repo.name}
