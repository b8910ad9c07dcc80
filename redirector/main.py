"""FastAPI application entry point for the redirect service.

This module configures and initializes the FastAPI application with
lifecycle management, instrumentation and route registration.

Application Lifecycle Diagram
=============================
::
    ┌─────────────┐
    │  uvicorn    │
    │  startup    │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ lifespan()  │
    │ startup:    │
    │ service     │
    │ manager,    │
    │ metrics port│
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Serve HTTP  │
    │ requests    │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ lifespan()  │
    │ shutdown:   │
    │ close Redis │
    └─────────────┘

How to Use
===========
**Step 1 — Run with the bundled CLI**::
    url-redirector --bind 0.0.0.0 --port 5000

**Step 2 — Or run with uvicorn directly**::
    uvicorn redirector.main:app --host 0.0.0.0 --port 5000

**Step 3 — Make requests**::
    curl -i -H "Host: short.example" http://localhost:5000/abc123

Key Behaviours
===============
- Interactive docs and the OpenAPI schema are disabled so that every path,
  including ``/docs`` and ``/metrics``, is a resolvable short link.
- Prometheus metrics are exposed on ``METRICS_PORT`` (disabled when 0).
- Framework-level HTTP errors (e.g. 405) are answered with the plain 404.
- Redis is closed on shutdown.
"""

__all__ = ["app", "create_app"]

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from prometheus_client import start_http_server
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from redirector.config import Settings, get_settings
from redirector.dependencies import _service_manager
from redirector.responses import not_found
from redirector.routes import router


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # Startup
        await _service_manager.initialize(settings)
        logger = _service_manager.logger
        if settings.METRICS_PORT:
            start_http_server(settings.METRICS_PORT)
            logger.info(f"Metrics exposed on port {settings.METRICS_PORT}")
        logger.info(f"Redirect service started, default redirect {settings.REDIRECT_URL}")
        yield
        # Shutdown
        await _service_manager.cleanup()
        logger.info("Redirect service stopped")

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="Host and path based redirect service backed by Redis",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        return not_found()

    Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=False,
        should_respect_env_var=False,
    ).instrument(app)

    app.include_router(router)
    return app


app = create_app()
