"""FastAPI dependencies resolving objects built during startup."""

from __future__ import annotations

from fastapi import Request

from config import Settings

from .services.kitchen import Kitchen


def get_kitchen(request: Request) -> Kitchen:
    """Return the order service stored on the application state."""

    return request.app.state.kitchen


def get_request_timeout(request: Request) -> float | None:
    """Return the per-request storage deadline, ``None`` when disabled."""

    settings: Settings = request.app.state.settings
    return settings.request_timeout_secs or None
