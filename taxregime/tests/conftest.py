"""
Test configuration for the taxregime tests.

sys.path is configured so BOTH import styles resolve:
  - 'from tests...'      (shared fixtures/data, using taxregime/ as root)
  - 'from taxregime...'  (production modules, using the project root)

Redis is replaced by InMemoryRedis through FastAPI dependency overrides, so no
server is needed to run the suite.
"""
import sys
from pathlib import Path
from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

_package_dir = Path(__file__).parent.parent        # .../taxregime/
_project_root = _package_dir.parent                # .../<repo>/

for _path in (_project_root, _package_dir):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from taxregime.cache import get_redis  # noqa: E402
from taxregime.main import app  # noqa: E402


class InMemoryRedis:
    """The subset of the redis.asyncio client the saved-input store calls."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    async def set(self, key: str, value: str) -> bool:
        self.values[key] = value
        self.ttls.pop(key, None)
        return True

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        self.values[key] = value
        self.ttls[key] = ttl
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.values.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed


@pytest.fixture
def redis_double() -> InMemoryRedis:
    return InMemoryRedis()


@pytest_asyncio.fixture
async def client(redis_double: InMemoryRedis):
    """Async httpx client using ASGI transport — no live server needed."""
    app.dependency_overrides[get_redis] = lambda: redis_double
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_redis, None)


@pytest_asyncio.fixture
async def client_without_redis():
    """Client for an app whose Redis pool never came up."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
