"""
Main CLI entry point for nudex-catalog.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from nudex_catalog import __version__
from nudex_catalog.cli.commands.api import api_app
from nudex_catalog.cli.commands.db import db_app
from nudex_catalog.cli.commands.seed import seed

console = Console()

app = typer.Typer(
    name="nudex-catalog",
    help="Video catalog service",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(api_app, name="api", help="API server management commands")
app.add_typer(db_app, name="db", help="Database schema commands")
app.command(name="seed")(seed)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold blue]nudex-catalog[/bold blue] v{__version__}",
            title="Version",
            border_style="blue",
        )
    )


if __name__ == "__main__":
    app()
