"""Prometheus middleware for HTTP request metrics."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..routes_metrics import http_requests_total


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Increment HTTP request counters."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        # Label by route template so table ids do not explode cardinality.
        route = request.scope.get("route")
        http_requests_total.labels(
            path=route.path if route else request.url.path,
            method=request.method,
            status=str(response.status_code),
        ).inc()
        return response
