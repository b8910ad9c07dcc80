"""Lookup outcomes as a tagged union.

Every store lookup is classified into exactly one of three variants before a
response is built::

    Hit(target)        value present and decodable as UTF-8 text
    Miss()             value absent, or present but not decodable
    StoreError(error)  the lookup itself failed
"""

from dataclasses import dataclass

__all__ = ["Hit", "Miss", "Outcome", "StoreError", "classify_value"]


@dataclass(frozen=True)
class Hit:
    target: str


@dataclass(frozen=True)
class Miss:
    pass


@dataclass(frozen=True)
class StoreError:
    error: BaseException


Outcome = Hit | Miss | StoreError


def classify_value(value: bytes | str | None) -> Hit | Miss:
    """Classify the raw result of a successful ``GET``."""
    if value is None:
        return Miss()
    if isinstance(value, str):
        return Hit(value)
    if isinstance(value, (bytes, bytearray)):
        try:
            return Hit(bytes(value).decode("utf-8"))
        except UnicodeDecodeError:
            return Miss()
    return Miss()
