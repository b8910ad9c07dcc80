"""Redis handle management and key layout for the redirect service.

This module provides a single shared Redis client with connection pooling for
redirect lookups and telemetry pushes.

Flow Diagram — Store Access
===========================
::
    ┌─────────────┐
    │  Request    │
    │  task       │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ get_store() │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Check global │
    │ client var   │
    └──────┬──────┘
    EXISTS?  │
    ┌─────┴─────┐
    │ NO         │ YES
    ▼            ▼
┌─────────┐  ┌─────────┐
│ Create  │  │ Return  │
│ Redis   │  │ existing│
│ client  │  │ client  │
└─────────┘  └─────────┘

Key Layout
==========
::
    <namespace>:<host>:<path>   → redirect target (string)
    <namespace>:hits            → list of telemetry records
    <namespace>:misses          → list of telemetry records

An empty namespace drops the prefix: ``<host>:<path>``, ``hits``, ``misses``.

Key Behaviours
===============
- Redis client is created lazily on first access and reused by every request.
- Responses are NOT decoded by the client; the resolver classifies raw bytes.
- Reconnects use a constant back-off; the resolver never retries on its own.
- Connection is properly closed on application shutdown.

Functions:
    create_store():  Build a Redis client from settings.
    get_store():  Shared Redis client.
    close_store():  Cleanup function for shutdown.
    lookup_key():  Redirect lookup key for a host and path.
    list_key():  Telemetry list key.
"""

import redis.asyncio as redis
from redis.asyncio.retry import Retry
from redis.backoff import ConstantBackoff
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from redirector.config import Settings, get_settings

__all__ = [
    "STORE_ERRORS",
    "close_store",
    "create_store",
    "get_store",
    "list_key",
    "lookup_key",
]

# Anything the client raises while talking to the server
STORE_ERRORS: tuple[type[BaseException], ...] = (RedisError, OSError)

store_client: redis.Redis | None = None


def _join(*parts: str) -> str:
    return ":".join(parts)


def lookup_key(host: str, path: str, namespace: str = "") -> str:
    if namespace:
        return _join(namespace, host, path)
    return _join(host, path)


def list_key(name: str, namespace: str = "") -> str:
    if namespace:
        return _join(namespace, name)
    return name


def create_store(settings: Settings) -> redis.Redis:
    retry = Retry(
        ConstantBackoff(settings.REDIS_RECONNECT_DELAY_SECONDS),
        settings.REDIS_RECONNECT_ATTEMPTS,
    )
    return redis.from_url(
        settings.redis_url,
        decode_responses=False,
        retry=retry,
        retry_on_error=[RedisConnectionError, RedisTimeoutError],
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT_SECONDS,
    )


async def get_store(settings: Settings | None = None) -> redis.Redis:
    global store_client
    if store_client is None:
        store_client = create_store(settings or get_settings())
    return store_client


async def close_store() -> None:
    global store_client
    if store_client is not None:
        await store_client.aclose()
        store_client = None
