"""Pydantic schemas for request metadata and telemetry records.

Schema Hierarchy
=================
::
    ClientMetadata
    ├─ remote_addr: str | None   (last X-Forwarded-For hop)
    └─ user_agent: str | None

    TelemetryRecord
    ├─ host: str | None
    ├─ path: str | None
    ├─ remote_addr: str | None
    └─ user_agent: str | None

Wire Format
===========
A telemetry record is pushed to the store as a compact JSON array, in field
order, with ``null`` for unknown values::

    ["short.example","abc123","203.0.113.5",null]

Key Behaviours
===============
- Unknown values are ``None``/``null``, never ``""``.
- Records are immutable once built.
"""

import json

from pydantic import BaseModel, ConfigDict

__all__ = ["ClientMetadata", "TelemetryRecord"]


class ClientMetadata(BaseModel):
    remote_addr: str | None = None
    user_agent: str | None = None

    model_config = ConfigDict(frozen=True)


class TelemetryRecord(BaseModel):
    host: str | None = None
    path: str | None = None
    remote_addr: str | None = None
    user_agent: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def build(cls, host: str, path: str, metadata: ClientMetadata) -> "TelemetryRecord":
        return cls(
            host=host,
            path=path,
            remote_addr=metadata.remote_addr,
            user_agent=metadata.user_agent,
        )

    def as_tuple(self) -> tuple[str | None, str | None, str | None, str | None]:
        return (self.host, self.path, self.remote_addr, self.user_agent)

    def encode(self) -> str:
        """Serialize to the compact JSON array stored in the telemetry lists."""
        return json.dumps(list(self.as_tuple()), separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def decode(cls, payload: str | bytes) -> "TelemetryRecord":
        """Parse a stored telemetry entry.

        Raises:
            ValueError: If the payload is not a four-element JSON array of
                strings and nulls.
        """
        values = json.loads(payload)
        if not isinstance(values, list) or len(values) != 4:
            raise ValueError("Telemetry record must be a JSON array of four values")
        host, path, remote_addr, user_agent = values
        return cls.model_validate(
            {"host": host, "path": path, "remote_addr": remote_addr, "user_agent": user_agent},
            strict=True,
        )
