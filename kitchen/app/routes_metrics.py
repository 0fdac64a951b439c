# routes_metrics.py

"""Prometheus metrics and /metrics endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

router = APIRouter()

# Counters
http_requests_total = Counter(
    "http_requests_total", "Total HTTP requests", ["path", "method", "status"]
)
orders_created_total = Counter("orders_created_total", "Total orders created")
orders_created_total.inc(0)

orders_rejected_total = Counter(
    "orders_rejected_total", "Total orders rejected for an unknown menu item"
)
orders_rejected_total.inc(0)

orders_cancelled_total = Counter("orders_cancelled_total", "Total orders cancelled")
orders_cancelled_total.inc(0)


@router.get("/metrics")
async def metrics() -> Response:
    """Expose Prometheus metrics."""

    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
