"""Dependency injection with a singleton service manager.

This module owns the resources shared by every request task (settings,
logger, Redis handle) and builds a lightweight per-request context and
resolver on top of them.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import redis.asyncio as redis
from fastapi import Depends, Request

from redirector.config import Settings, get_settings
from redirector.metadata import extract_client_metadata
from redirector.resolver import RedirectResolver
from redirector.schemas import ClientMetadata
from redirector.store import close_store, get_store

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ============================================================================
# SINGLETON SERVICE MANAGER
# ============================================================================


class ServiceManager:
    """Singleton service manager for shared resources.

    The Redis handle is created once and shared by all request tasks; the
    client multiplexes commands over its own connection pool.
    """

    _instance: Optional["ServiceManager"] = None
    _initialized: bool = False

    def __new__(cls) -> "ServiceManager":
        """Implement singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    async def initialize(self, settings: Settings | None = None) -> None:
        """Initialize shared resources once at startup."""
        if not self._initialized:
            self.settings = settings or get_settings()
            self.logger = self._setup_logger()
            self.store = await get_store(self.settings)
            self._initialized = True

    def _setup_logger(self) -> logging.Logger:
        """Setup logger once."""
        logger = logging.getLogger("redirector")
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)
        logger.setLevel(self.settings.LOG_LEVEL.upper())
        return logger

    async def cleanup(self) -> None:
        """Cleanup shared resources at shutdown."""
        await close_store()
        if hasattr(self, "store"):
            del self.store
        self._initialized = False


# Global singleton instance
_service_manager = ServiceManager()


# ============================================================================
# LIGHTWEIGHT REQUEST CONTEXT
# ============================================================================


@dataclass
class RequestContext:
    """Per-request view over the shared resources.

    Attributes:
        service_manager: Singleton service manager with shared resources
        client: Client address and user agent taken from the headers
    """

    service_manager: ServiceManager
    client: ClientMetadata = field(default_factory=ClientMetadata)

    @property
    def store(self) -> redis.Redis:
        return self.service_manager.store

    @property
    def settings(self) -> Settings:
        return self.service_manager.settings

    @property
    def logger(self) -> logging.LoggerAdapter:
        """Shared logger tagged with this request's client metadata."""
        return logging.LoggerAdapter(
            self.service_manager.logger,
            {
                "client_ip": self.client.remote_addr,
                "user_agent": self.client.user_agent,
            },
        )


# ============================================================================
# DEPENDENCY FUNCTIONS
# ============================================================================


async def get_service_manager() -> ServiceManager:
    if not _service_manager._initialized:
        await _service_manager.initialize()
    return _service_manager


async def get_request_context(
    request: Request,
    manager: ServiceManager = Depends(get_service_manager),
) -> RequestContext:
    return RequestContext(
        service_manager=manager,
        client=extract_client_metadata(request.headers.raw),
    )


def get_resolver(ctx: RequestContext = Depends(get_request_context)) -> RedirectResolver:
    return RedirectResolver.from_context(ctx)
