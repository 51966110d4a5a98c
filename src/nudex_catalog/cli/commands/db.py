"""CLI commands for schema management."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from nudex_catalog.config.database import DatabaseManager
from nudex_catalog.config.settings import get_settings
from nudex_catalog.exceptions import EXIT_CODE_DATABASE_ERROR

console = Console()

db_app = typer.Typer(
    name="db",
    help="Database schema commands",
    no_args_is_help=True,
)


async def _run(action: str) -> None:
    db_manager = DatabaseManager(get_settings())
    try:
        if action == "create":
            await db_manager.create_tables()
        else:
            await db_manager.drop_tables()
    finally:
        await db_manager.close()


@db_app.command()
def create() -> None:
    """Create every catalog table that does not exist yet."""
    try:
        asyncio.run(_run("create"))
    except Exception as e:
        console.print(f"[red]❌ Failed to create tables: {e}[/red]")
        raise typer.Exit(code=EXIT_CODE_DATABASE_ERROR)
    console.print("[green]✅ Catalog tables created[/green]")


@db_app.command()
def drop(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Drop every catalog table."""
    if not yes:
        typer.confirm("Drop all catalog tables?", abort=True)
    try:
        asyncio.run(_run("drop"))
    except Exception as e:
        console.print(f"[red]❌ Failed to drop tables: {e}[/red]")
        raise typer.Exit(code=EXIT_CODE_DATABASE_ERROR)
    console.print("[yellow]Catalog tables dropped[/yellow]")
