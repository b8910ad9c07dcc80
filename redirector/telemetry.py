"""Best-effort hit/miss telemetry written to Redis lists.

Every classified lookup pushes one encoded ``TelemetryRecord`` onto the front
of either the hits or the misses list. A failed push is logged and counted but
never surfaces to the caller.

Flow Diagram — record()
=======================
::
    ┌─────────────┐
    │ Encode      │
    │ record JSON │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ LPUSH onto  │
    │ <ns>:hits / │
    │ <ns>:misses │
    └──────┬──────┘
    OK?   │
    ┌─────┴─────┐
    │ NO         │ YES
    ▼            ▼
┌─────────┐  ┌─────────┐
│ Log     │  │ Return  │
│ error,  │  │ True    │
│ False   │  │         │
└─────────┘  └─────────┘
"""

import logging

import redis.asyncio as redis
from prometheus_client import Counter

from redirector.config import Settings
from redirector.enums import TelemetryList, WriteStatus
from redirector.schemas import TelemetryRecord
from redirector.store import STORE_ERRORS, list_key

__all__ = ["TELEMETRY_WRITES_TOTAL", "TelemetryRecorder"]

TELEMETRY_WRITES_TOTAL = Counter(
    "url_redirector_telemetry_writes_total",
    "Total telemetry list writes",
    ["list", "status"],
)


class TelemetryRecorder:
    """Pushes telemetry records onto the configured Redis lists."""

    def __init__(
        self,
        store: redis.Redis,
        settings: Settings,
        logger: logging.Logger | logging.LoggerAdapter,
    ):
        self._store = store
        self._logger = logger
        self._list_keys = {
            TelemetryList.HITS: list_key(settings.HITS_LIST, settings.KEY_NAMESPACE),
            TelemetryList.MISSES: list_key(settings.MISSES_LIST, settings.KEY_NAMESPACE),
        }

    def key_for(self, telemetry_list: TelemetryList) -> str:
        return self._list_keys[telemetry_list]

    async def record(self, telemetry_list: TelemetryList, record: TelemetryRecord) -> bool:
        """Append ``record`` to ``telemetry_list``.

        Returns:
            bool: True once the store acknowledged the push, False if it failed.
        """
        key = self.key_for(telemetry_list)
        try:
            await self._store.lpush(key, record.encode())
        except STORE_ERRORS as exc:
            TELEMETRY_WRITES_TOTAL.labels(list=telemetry_list, status=WriteStatus.ERROR).inc()
            self._logger.error(f"Telemetry write to {key} failed: {type(exc).__name__}: {exc}")
            return False

        TELEMETRY_WRITES_TOTAL.labels(list=telemetry_list, status=WriteStatus.SUCCESS).inc()
        return True
