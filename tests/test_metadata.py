"""Client metadata and Host header extraction tests."""

import pytest

from redirector.metadata import extract_client_metadata, parse_host


def test_forwarded_for_takes_last_hop() -> None:
    metadata = extract_client_metadata([(b"x-forwarded-for", b"10.0.0.1, 203.0.113.5")])
    assert metadata.remote_addr == "203.0.113.5"


def test_forwarded_for_single_address() -> None:
    metadata = extract_client_metadata([(b"x-forwarded-for", b"198.51.100.7")])
    assert metadata.remote_addr == "198.51.100.7"


def test_forwarded_for_splits_on_comma_space_only() -> None:
    # Without the space the whole value is a single element
    metadata = extract_client_metadata([(b"x-forwarded-for", b"10.0.0.1,203.0.113.5")])
    assert metadata.remote_addr == "10.0.0.1,203.0.113.5"


def test_header_names_are_case_insensitive() -> None:
    metadata = extract_client_metadata([(b"X-Forwarded-For", b"10.0.0.1"), (b"User-Agent", b"curl/8.4.0")])
    assert metadata.remote_addr == "10.0.0.1"
    assert metadata.user_agent == "curl/8.4.0"


def test_missing_headers_are_absent() -> None:
    metadata = extract_client_metadata([])
    assert metadata.remote_addr is None
    assert metadata.user_agent is None


def test_repeated_forwarded_for_is_absent() -> None:
    metadata = extract_client_metadata([(b"x-forwarded-for", b"10.0.0.1"), (b"x-forwarded-for", b"10.0.0.2")])
    assert metadata.remote_addr is None


def test_non_utf8_values_are_absent() -> None:
    metadata = extract_client_metadata([(b"x-forwarded-for", b"\xc3\x28"), (b"user-agent", b"\xff\xfe")])
    assert metadata.remote_addr is None
    assert metadata.user_agent is None


def test_utf8_user_agent_is_decoded() -> None:
    metadata = extract_client_metadata([(b"user-agent", "Agënt/1.0".encode("utf-8"))])
    assert metadata.user_agent == "Agënt/1.0"


def test_empty_user_agent_stays_empty() -> None:
    metadata = extract_client_metadata([(b"user-agent", b"")])
    assert metadata.user_agent == ""


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (b"short.example", "short.example"),
        (b"short.example:8080", "short.example"),
        (b"127.0.0.1:5000", "127.0.0.1"),
        (b"short.example:", "short.example"),
        (b"[::1]:8080", "[::1]"),
        (b"[::1]", "[::1]"),
        (b"", None),
        (b"\xff", None),
    ],
)
def test_parse_host(raw: bytes, expected: str | None) -> None:
    assert parse_host([(b"host", raw)]) == expected


def test_parse_host_missing() -> None:
    assert parse_host([(b"user-agent", b"curl/8.4.0")]) is None
