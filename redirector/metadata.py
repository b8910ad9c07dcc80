"""Client metadata extraction from raw request headers.

Headers are read from the raw ``(name, value)`` byte pairs of the ASGI scope
rather than from Starlette's latin-1 decoded view, so that values which are
not valid UTF-8 can be told apart from valid ones.

Extraction Rules
================
::
    X-Forwarded-For: 10.0.0.1, 203.0.113.5
        └─ split on ", " and keep the LAST hop  → "203.0.113.5"

    User-Agent: curl/8.4.0
        └─ decoded verbatim                     → "curl/8.4.0"

    header missing / repeated / not UTF-8      → None

Key Behaviours
===============
- Nothing in this module raises; every malformed input degrades to ``None``.
- ``None`` means "unknown" and is kept distinct from an empty string.
"""

from collections.abc import Iterable

from redirector.schemas import ClientMetadata

__all__ = ["RawHeaders", "extract_client_metadata", "get_single_header", "parse_host"]

RawHeaders = Iterable[tuple[bytes, bytes]]

FORWARDED_FOR_HEADER = b"x-forwarded-for"
USER_AGENT_HEADER = b"user-agent"
HOST_HEADER = b"host"
FORWARDED_FOR_SEPARATOR = ", "


def get_single_header(headers: RawHeaders, name: bytes) -> str | None:
    """Return the UTF-8 value of a header that appears exactly once."""
    values = [value for key, value in headers if key.lower() == name]
    if len(values) != 1:
        return None
    try:
        return values[0].decode("utf-8")
    except UnicodeDecodeError:
        return None


def _remote_addr(headers: RawHeaders) -> str | None:
    forwarded_for = get_single_header(headers, FORWARDED_FOR_HEADER)
    if forwarded_for is None:
        return None
    return forwarded_for.split(FORWARDED_FOR_SEPARATOR)[-1]


def extract_client_metadata(headers: RawHeaders) -> ClientMetadata:
    headers = list(headers)
    return ClientMetadata(
        remote_addr=_remote_addr(headers),
        user_agent=get_single_header(headers, USER_AGENT_HEADER),
    )


def parse_host(headers: RawHeaders) -> str | None:
    """Return the Host header's hostname with any port suffix removed.

    ``short.example:8080`` and ``short.example:`` become ``short.example``
    and ``[::1]:8080`` becomes ``[::1]``. An empty or undecodable value
    counts as missing.
    """
    host = get_single_header(headers, HOST_HEADER)
    if not host:
        return None
    host = host.strip()
    if host.startswith("["):
        end = host.find("]")
        hostname = host[: end + 1] if end != -1 else host
    else:
        hostname, _, port = host.rpartition(":")
        # An empty port ("short.example:") is no port
        if not hostname or not (port == "" or port.isdigit()):
            hostname = host
    return hostname or None
