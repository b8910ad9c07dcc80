"""Configuration management for the redirect service.

This module provides centralized configuration management using Pydantic BaseSettings
with environment variable support and caching for performance.

Flow Diagram — get_settings()
=============================
::
    ┌─────────────┐
    │  Call get_  │
    │  settings() │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Check cache  │
    │ (lru_cache)  │
    └──────┬──────┘
    HIT?  │
    ┌─────┴─────┐
    │ NO         │ YES
    ▼            ▼
┌─────────┐  ┌─────────┐
│ Create  │  │ Return  │
│ Settings│  │ cached  │
│ instance│  │ value   │
└─────────┘  └─────────┘

How to Use
===========
**Step 1 — Import**::
    from redirector.config import get_settings

**Step 2 — Get settings**::
    settings = get_settings()
    default_url = settings.REDIRECT_URL

**Step 3 — Override from the command line**::
    settings = get_settings().model_copy(update={"BIND_PORT": 8080})

Key Behaviours
===============
- Settings are cached after first access for performance.
- Environment variables override defaults automatically.
- ``REDIS_URL`` wins over ``REDIS_HOST``/``REDIS_PORT``/``REDIS_DB`` when set.
- An empty ``KEY_NAMESPACE`` drops the prefix from every store key.

Classes:
    Settings:  Pydantic model for all configuration values.

"""

__all__ = ["Settings", "get_settings"]

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "url-redirector"

    # Fallback destination for the root path and for unknown short paths
    REDIRECT_URL: str = "http://127.0.0.1:5000"

    # HTTP listener
    BIND_HOST: str = "127.0.0.1"
    BIND_PORT: int = 5000

    # Redis
    REDIS_HOST: str = "127.0.0.1"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_URL: str = ""
    # Per-command retries inside the client; the delay only applies when attempts > 0
    REDIS_RECONNECT_DELAY_SECONDS: float = 2.0
    REDIS_RECONNECT_ATTEMPTS: int = 0
    REDIS_SOCKET_TIMEOUT_SECONDS: float | None = None

    # Key layout
    KEY_NAMESPACE: str = "r3xx"
    HITS_LIST: str = "hits"
    MISSES_LIST: str = "misses"

    # Observability
    METRICS_PORT: int = 0
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    @property
    def redis_url(self) -> str:
        if self.REDIS_URL:
            return self.REDIS_URL
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
