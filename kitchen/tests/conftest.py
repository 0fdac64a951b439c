"""Shared fixtures for the kitchen test-suite."""

from __future__ import annotations

import fakeredis
import fakeredis.aioredis
import pytest

from kitchen.app.catalog import build_catalog
from kitchen.app.repos import MemoryOrdersRepo
from kitchen.app.repos_redis import RedisOrdersRepo

NUM_TABLES = 20


@pytest.fixture
def anyio_backend() -> str:  # pragma: no cover - required by pytest-anyio
    return "asyncio"


@pytest.fixture
def catalog():
    return build_catalog(NUM_TABLES)


@pytest.fixture
def fake_redis():
    return fakeredis.aioredis.FakeRedis(
        server=fakeredis.FakeServer(), decode_responses=True
    )


@pytest.fixture(params=["memory", "redis"])
async def repo(request, catalog, fake_redis):
    """Yield each repository backend seeded with ``catalog``."""

    if request.param == "memory":
        backend = MemoryOrdersRepo(catalog)
    else:
        backend = RedisOrdersRepo(fake_redis, catalog, prefix="test")
    await backend.seed_catalog()
    yield backend
    await backend.close()

