"""Response builders for every answer the redirect service can give.

Each builder is a pure function returning a fresh Starlette response; none of
them touch the store or log anything.

Response Matrix
===============
::
    not_found()                 404  body "404 Not Found"
    service_unavailable()       503  empty body
    default_redirect(url)       307  Location: url
    permanent_redirect(url)     301  Location: url

Key Behaviours
===============
- ``Location`` is written verbatim as UTF-8 bytes. ``RedirectResponse`` is not
  used because it percent-quotes the target.
- 301 (not 302/307) marks a resolved short link as cacheable by clients.
"""

from fastapi import Response, status
from fastapi.responses import PlainTextResponse

__all__ = [
    "NOT_FOUND_BODY",
    "default_redirect",
    "not_found",
    "permanent_redirect",
    "service_unavailable",
]

NOT_FOUND_BODY = "404 Not Found"


def _redirect(status_code: int, location: str) -> Response:
    response = Response(status_code=status_code)
    response.raw_headers.append((b"location", location.encode("utf-8")))
    return response


def not_found() -> Response:
    return PlainTextResponse(NOT_FOUND_BODY, status_code=status.HTTP_404_NOT_FOUND)


def service_unavailable() -> Response:
    return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


def default_redirect(default_url: str) -> Response:
    """Temporary redirect to the configured fallback destination."""
    return _redirect(status.HTTP_307_TEMPORARY_REDIRECT, default_url)


def permanent_redirect(target_url: str) -> Response:
    """Permanent redirect to a resolved short-link target."""
    return _redirect(status.HTTP_301_MOVED_PERMANENTLY, target_url)
