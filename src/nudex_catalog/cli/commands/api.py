"""CLI commands for API server management."""

from __future__ import annotations

from typing import Optional

import typer

from nudex_catalog.config.settings import get_settings

api_app = typer.Typer(
    name="api",
    help="API server management commands",
    no_args_is_help=True,
)


@api_app.command()
def start(
    host: Optional[str] = typer.Option(
        None, "--host", help="Interface to bind (default: HOST setting)"
    ),
    port: Optional[int] = typer.Option(
        None, "--port", "-p", help="Port to run the server on (default: PORT setting)"
    ),
    production: bool = typer.Option(
        False, "--production", help="Run in production mode"
    ),
) -> None:
    """
    Start the catalog API server.

    Development mode (default): Auto-reload enabled, info logging.
    Production mode: Multiple workers, warning-level logging.

    Examples:
        nudex-catalog api start
        nudex-catalog api start --port 3000
        nudex-catalog api start --production
    """
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port

    if production:
        uvicorn.run(
            "nudex_catalog.api.main:app",
            host=bind_host,
            port=bind_port,
            workers=2,
            log_level="warning",
        )
    else:
        uvicorn.run(
            "nudex_catalog.api.main:app",
            host=bind_host,
            port=bind_port,
            reload=True,
            log_level="info",
        )
