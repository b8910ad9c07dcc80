"""Shared enums for the redirect service.

This module defines all status and label enums used across the codebase.
Using enums instead of string literals provides type safety and prevents typos.
"""

from enum import StrEnum

__all__ = ["LookupStatus", "ShortcutReason", "TelemetryList", "WriteStatus"]


class TelemetryList(StrEnum):
    """Telemetry lists a classified lookup is appended to."""

    HITS = "hits"
    MISSES = "misses"


class LookupStatus(StrEnum):
    """Lookup outcome values for metrics and logging."""

    HIT = "hit"
    MISS = "miss"
    ERROR = "error"


class ShortcutReason(StrEnum):
    """Reasons a request was answered without touching the store."""

    NOT_FOUND = "not_found"
    ROOT = "root"


class WriteStatus(StrEnum):
    """Telemetry write status values for metrics."""

    SUCCESS = "success"
    ERROR = "error"
