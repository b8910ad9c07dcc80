"""FastAPI route definitions for the redirect service.

A single catch-all route accepts every path and every standard method; the
resolver, not the router, decides which requests are answered with 404.

API Endpoint Overview
=====================
::
    GET  /
        └─ 307 Redirect to the default URL

    GET  /:path
        └─ 301 Redirect, 307 Redirect or 503

    *    /:path  (any other method)
        └─ 404 Not Found

Key Behaviours
===============
- The path is the raw, still percent-encoded request target without its
  query string, so keys match exactly what was written to Redis.
- Headers are handed to the resolver as raw byte pairs.
"""

from fastapi import APIRouter, Depends, Request, Response

from redirector.dependencies import RequestContext, get_request_context, get_resolver
from redirector.metadata import parse_host
from redirector.resolver import RedirectRequest, RedirectResolver
from redirector.schemas import ClientMetadata

__all__ = ["ALL_METHODS", "router"]

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]

router = APIRouter()


def _request_path(request: Request) -> str:
    raw_path = request.scope.get("raw_path")
    if raw_path:
        try:
            return raw_path.decode("utf-8").split("?", 1)[0]
        except UnicodeDecodeError:
            pass
    return request.url.path


def build_redirect_request(request: Request, client: ClientMetadata | None = None) -> RedirectRequest:
    headers = list(request.headers.raw)
    return RedirectRequest(
        method=request.method.upper(),
        host=parse_host(headers),
        path=_request_path(request),
        headers=headers,
        client=client,
    )


@router.api_route("/{request_path:path}", methods=ALL_METHODS, tags=["redirect"], include_in_schema=False)
async def redirect(
    request: Request,
    ctx: RequestContext = Depends(get_request_context),
    resolver: RedirectResolver = Depends(get_resolver),
) -> Response:
    return await resolver.resolve(build_redirect_request(request, ctx.client))
