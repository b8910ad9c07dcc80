"""Key layout and Redis handle tests."""

import pytest

from redirector.config import Settings
from redirector.store import close_store, create_store, get_store, list_key, lookup_key


def test_lookup_key_with_namespace() -> None:
    assert lookup_key("short.example", "abc123", "r3xx") == "r3xx:short.example:abc123"


def test_lookup_key_without_namespace() -> None:
    assert lookup_key("short.example", "abc123") == "short.example:abc123"


def test_list_key() -> None:
    assert list_key("hits", "r3xx") == "r3xx:hits"
    assert list_key("misses", "") == "misses"


def test_create_store_returns_raw_bytes_client(settings: Settings) -> None:
    client = create_store(settings.model_copy(update={"REDIS_HOST": "10.0.0.9", "REDIS_PORT": 6380}))
    kwargs = client.connection_pool.connection_kwargs

    assert kwargs["host"] == "10.0.0.9"
    assert kwargs["port"] == 6380
    assert kwargs.get("decode_responses", False) is False


@pytest.mark.asyncio
async def test_get_store_reuses_handle(settings: Settings) -> None:
    first = await get_store(settings)
    second = await get_store(settings)
    try:
        assert first is second
    finally:
        await close_store()

    third = await get_store(settings)
    try:
        assert third is not first
    finally:
        await close_store()


def test_default_store_does_not_retry(settings: Settings) -> None:
    retry = create_store(settings).connection_pool.connection_kwargs["retry"]
    assert retry._retries == 0


def test_retry_delay_applies_when_attempts_configured(settings: Settings) -> None:
    configured = settings.model_copy(update={"REDIS_RECONNECT_ATTEMPTS": 3, "REDIS_RECONNECT_DELAY_SECONDS": 0.5})
    retry = create_store(configured).connection_pool.connection_kwargs["retry"]

    assert retry._retries == 3
    assert retry._backoff.compute(1) == 0.5
