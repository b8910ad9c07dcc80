"""Shared pytest fixtures for resolver and HTTP tests.

Redis is replaced by an ``AsyncMock`` so no server is needed.
"""

from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
import redis.asyncio as redis
from httpx import ASGITransport, AsyncClient

from redirector.config import Settings
from redirector.dependencies import get_service_manager
from redirector.main import app
from redirector.resolver import RedirectResolver


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, REDIRECT_URL="http://127.0.0.1:5000", KEY_NAMESPACE="r3xx", REDIS_URL="")


@pytest.fixture
def mock_store() -> AsyncMock:
    """Mock Redis client."""
    store = AsyncMock(spec=redis.Redis)
    store.get = AsyncMock(return_value=None)
    store.lpush = AsyncMock(return_value=1)
    return store


@pytest.fixture
def mock_logger() -> MagicMock:
    logger = MagicMock()
    logger.info = MagicMock()
    logger.debug = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    return logger


@pytest.fixture
def resolver(mock_store, settings, mock_logger) -> RedirectResolver:
    return RedirectResolver(mock_store, settings, mock_logger)


@pytest_asyncio.fixture(scope="function")
async def client(mock_store, settings, mock_logger) -> AsyncGenerator[AsyncClient, None]:
    manager = SimpleNamespace(settings=settings, store=mock_store, logger=mock_logger)
    app.dependency_overrides[get_service_manager] = lambda: manager

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://short.example") as ac:
        yield ac

    app.dependency_overrides.clear()
