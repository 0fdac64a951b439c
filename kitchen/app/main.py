# main.py

"""FastAPI application taking food orders from restaurant tables."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, StorageBackend, get_settings

from .catalog import build_catalog
from .db import create_redis_client
from .errors import KitchenError
from .middlewares import LoggingMiddleware, PrometheusMiddleware, RequestIdMiddleware
from .obs import capture_exception, configure_logging, init_sentry
from .repos import build_orders_repo
from .routes_menus import router as menus_router
from .routes_metrics import router as metrics_router
from .routes_orders import router as orders_router
from .routes_ready import router as ready_router
from .services.kitchen import Kitchen, processing_time_policy
from .utils.responses import error_response, kitchen_error

logger = logging.getLogger("api")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Assemble the application for ``settings``.

    The catalog, repository and order service are built on startup. A Redis
    client already placed on ``app.state.redis`` before startup is reused
    instead of opening a new connection pool.
    """

    settings = settings or get_settings()
    app = FastAPI(title="Kitchen API", version="1.0.0")
    app.state.settings = settings
    app.state.redis = None

    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(LoggingMiddleware)
    # Outermost, so every inner layer sees the same id.
    app.add_middleware(RequestIdMiddleware)

    app.include_router(ready_router)
    app.include_router(metrics_router)
    app.include_router(menus_router)
    app.include_router(orders_router)

    @app.exception_handler(KitchenError)
    async def kitchen_error_handler(request: Request, exc: KitchenError):
        logger.warning(
            exc.message,
            extra={"status": exc.status_code, "route": request.url.path},
        )
        return kitchen_error(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            exc.detail,
            extra={"status": exc.status_code, "route": request.url.path},
        )
        return error_response(exc.status_code, exc.detail, exc.status_code)

    @app.exception_handler(Exception)
    async def general_error_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_error", extra={"status": 500, "route": request.url.path}
        )
        capture_exception(exc)
        return error_response(500, "Internal Server Error", 500)

    @app.on_event("startup")
    async def build_kitchen() -> None:
        """Build the catalog snapshot, the repository and the order service."""

        catalog = build_catalog(settings.num_tables)
        redis = app.state.redis
        if settings.storage_backend is StorageBackend.REDIS and redis is None:
            redis = create_redis_client(settings)
            app.state.redis = redis
        repo = build_orders_repo(settings, catalog, redis)
        await repo.seed_catalog()
        app.state.catalog = catalog
        app.state.repo = repo
        app.state.kitchen = Kitchen(
            catalog,
            repo,
            processing_time=processing_time_policy(
                settings.processing_time_min, settings.processing_time_max
            ),
        )
        logger.info("kitchen ready with %s backend", repo.name)

    @app.on_event("shutdown")
    async def close_repo() -> None:
        repo = getattr(app.state, "repo", None)
        if repo is not None:
            await repo.close()

    return app


_settings = get_settings()
configure_logging(_settings.log_level.upper())
init_sentry(_settings.error_dsn, env=_settings.env)

app = create_app(_settings)
