"""Redirect resolution - core request handling logic.

This module turns a parsed HTTP request plus the outcome of a Redis lookup
into one of the four responses the service can give, and records the lookup
in the hits/misses telemetry lists.

Resolution Flow
===============
::
    ┌─────────────┐
    │  Request    │
    └──────┬──────┘
           ▼
    ┌─────────────┐   not GET / no Host
    │ Gate        │──────────────────────► 404 Not Found
    └──────┬──────┘
           ▼
    ┌─────────────┐   empty path
    │ Root check  │──────────────────────► 307 default URL
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Build key & │
    │ telemetry   │
    │ record      │
    └──────┬──────┘
           ▼
    ┌─────────────┐   store error
    │ GET key     │──────────────────────► 503 (logged, no telemetry)
    └──────┬──────┘
    HIT?  │
    ┌─────┴─────┐
    │ NO         │ YES
    ▼            ▼
┌─────────┐  ┌─────────┐
│ 307     │  │ 301     │
│ default │  │ target  │
│ + LPUSH │  │ + LPUSH │
│ misses  │  │ hits    │
└─────────┘  └─────────┘

Key Behaviours
===============
- The telemetry push is awaited before the response is returned, so every
  classified lookup is recorded (or its failure logged) before the client
  sees a result.
- A failed telemetry push never changes the response.
- Store errors are never retried within a request and never leak into the
  response body.
- Client-input branches are normal control flow and only logged at DEBUG.

Example:
    >>> resolver = RedirectResolver(store, settings, logger)
    >>> response = await resolver.resolve(
    ...     RedirectRequest(method="GET", host="short.example", path="/abc123")
    ... )
    >>> response.status_code
    301
"""

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import redis.asyncio as redis
from fastapi import Response
from prometheus_client import Counter, Histogram

from redirector.config import Settings
from redirector.enums import LookupStatus, ShortcutReason, TelemetryList
from redirector.metadata import extract_client_metadata
from redirector.outcomes import Hit, Miss, Outcome, StoreError, classify_value
from redirector.responses import default_redirect, not_found, permanent_redirect, service_unavailable
from redirector.schemas import ClientMetadata, TelemetryRecord
from redirector.store import STORE_ERRORS, lookup_key
from redirector.telemetry import TelemetryRecorder

if TYPE_CHECKING:
    from redirector.dependencies import RequestContext

__all__ = [
    "LOOKUPS_TOTAL",
    "LOOKUP_DURATION",
    "SHORTCUT_RESPONSES_TOTAL",
    "RedirectRequest",
    "RedirectResolver",
]

PATH_SEPARATOR = "/"


# ============================================================================
# PROMETHEUS METRICS
# ============================================================================

LOOKUPS_TOTAL = Counter(
    "url_redirector_lookups_total",
    "Total redirect lookups by outcome",
    ["status"],
)
SHORTCUT_RESPONSES_TOTAL = Counter(
    "url_redirector_shortcut_responses_total",
    "Total requests answered without a store lookup",
    ["reason"],
)
LOOKUP_DURATION = Histogram(
    "url_redirector_lookup_duration_seconds",
    "Time taken by the Redis lookup",
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25],
)


# ============================================================================
# DATA STRUCTURES
# ============================================================================


@dataclass(frozen=True)
class RedirectRequest:
    """The parts of an HTTP request the resolver looks at.

    Attributes:
        method: HTTP method, upper case
        host: Host header hostname, or None when missing
        path: Request path including its leading separator
        headers: Raw ``(name, value)`` header byte pairs
        client: Client metadata already extracted from ``headers``, if any
    """

    method: str
    host: str | None
    path: str
    headers: list[tuple[bytes, bytes]] = field(default_factory=list)
    client: ClientMetadata | None = None


# ============================================================================
# CORE RESOLVER
# ============================================================================


class RedirectResolver:
    """Resolves short paths to redirect responses."""

    def __init__(
        self,
        store: redis.Redis,
        settings: Settings,
        logger: logging.Logger | logging.LoggerAdapter,
        recorder: TelemetryRecorder | None = None,
    ):
        self._store = store
        self._settings = settings
        self._logger = logger
        self._recorder = recorder or TelemetryRecorder(store, settings, logger)

    @classmethod
    def from_context(cls, ctx: "RequestContext") -> "RedirectResolver":
        """Build a resolver from a request context's shared resources."""
        return cls(ctx.store, ctx.settings, ctx.logger)

    @property
    def default_url(self) -> str:
        return self._settings.REDIRECT_URL

    async def resolve(self, request: RedirectRequest) -> Response:
        if request.method != "GET" or request.host is None:
            SHORTCUT_RESPONSES_TOTAL.labels(reason=ShortcutReason.NOT_FOUND).inc()
            self._logger.debug(f"Not found: {request.method} with host {request.host!r}")
            return not_found()

        path = request.path.removeprefix(PATH_SEPARATOR)
        if not path:
            SHORTCUT_RESPONSES_TOTAL.labels(reason=ShortcutReason.ROOT).inc()
            return default_redirect(self.default_url)

        key = lookup_key(request.host, path, self._settings.KEY_NAMESPACE)
        client = request.client or extract_client_metadata(request.headers)
        record = TelemetryRecord.build(request.host, path, client)

        outcome = await self.lookup(key)
        match outcome:
            case Hit(target=target):
                response = permanent_redirect(target)
                telemetry_list = TelemetryList.HITS
            case Miss():
                response = default_redirect(self.default_url)
                telemetry_list = TelemetryList.MISSES
            case StoreError(error=error):
                self._logger.error(f"Redis error looking up {key}: {type(error).__name__}: {error}")
                return service_unavailable()

        await self._recorder.record(telemetry_list, record)
        return response

    async def lookup(self, key: str) -> Outcome:
        """Fetch ``key`` and classify the result."""
        start_time = time.perf_counter()
        try:
            value = await self._store.get(key)
        except STORE_ERRORS as exc:
            LOOKUPS_TOTAL.labels(status=LookupStatus.ERROR).inc()
            return StoreError(exc)
        finally:
            LOOKUP_DURATION.observe(time.perf_counter() - start_time)

        outcome = classify_value(value)
        if isinstance(outcome, Hit):
            LOOKUPS_TOTAL.labels(status=LookupStatus.HIT).inc()
        else:
            LOOKUPS_TOTAL.labels(status=LookupStatus.MISS).inc()
        return outcome
