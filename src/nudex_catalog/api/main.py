"""FastAPI application for the nudex-catalog API."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from nudex_catalog import __version__
from nudex_catalog.api.exception_handlers import register_exception_handlers
from nudex_catalog.api.middleware import RequestIdMiddleware
from nudex_catalog.api.routers import categories, health, internal, producers, videos
from nudex_catalog.config.settings import Settings, get_settings
from nudex_catalog.container import Container
from nudex_catalog.logging_config import configure_logging

logger = logging.getLogger(__name__)

# Paths whose details are not logged
SENSITIVE_PATHS: frozenset[str] = frozenset({"/internal"})


def _is_sensitive_path(path: str) -> bool:
    return any(path.startswith(sensitive) for sensitive in SENSITIVE_PATHS)


def _get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxied requests."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        # First hop is the original client
        return forwarded_for.split(",")[0].strip()

    if request.client:
        return request.client.host
    return "unknown"


async def log_requests(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """
    Log incoming requests and outgoing responses.

    Responses are logged at INFO for 2xx/3xx, WARNING for 4xx and ERROR
    for 5xx. Internal endpoints are logged without their path.
    """
    start_time = time.perf_counter()
    method = request.method
    path = request.url.path
    shown_path = "[internal endpoint]" if _is_sensitive_path(path) else path

    logger.info("Request: %s %s from %s", method, shown_path, _get_client_ip(request))

    response = await call_next(request)

    duration = time.perf_counter() - start_time
    status_code = response.status_code
    if status_code >= 500:
        log_level = logging.ERROR
    elif status_code >= 400:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO

    logger.log(
        log_level,
        "Response: %s %s - %d (%.3fs)",
        method,
        shown_path,
        status_code,
        duration,
    )
    return response


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[Container] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Application settings; loaded from the environment when omitted
    container : Optional[Container]
        Pre-built container, mainly for tests; built from settings when
        omitted. The lifespan starts it and shuts it down either way.

    Returns
    -------
    FastAPI
        The configured application.
    """
    settings = settings or (container.settings if container else get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler for startup/shutdown."""
        configure_logging(settings)
        app_container = container or Container(settings)
        app.state.container = app_container
        await app_container.startup()
        try:
            yield
        finally:
            await app_container.shutdown()

    app = FastAPI(
        title="nudex Catalog API",
        description="Video catalog: search, browse by producer or category, random discovery",
        version=__version__,
        lifespan=lifespan,
    )

    # Outermost middleware is added last; the request ID must be set before logging
    app.middleware("http")(log_requests)
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(videos.router, tags=["videos"])
    app.include_router(producers.router, tags=["producers"])
    app.include_router(categories.router, tags=["categories"])
    app.include_router(internal.router, tags=["internal"])

    if container is not None:
        # Available before the lifespan runs, e.g. under a transport without lifespan support
        app.state.container = container

    return app


app = create_app()
