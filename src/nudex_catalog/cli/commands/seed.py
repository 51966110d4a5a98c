"""
Seed CLI command for nudex-catalog.

Loads the demo catalog into an empty database. Seeding is idempotent: it
is skipped when videos already exist unless ``--force`` is given.
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from nudex_catalog.container import Container
from nudex_catalog.exceptions import EXIT_CODE_DATABASE_ERROR
from nudex_catalog.services.seeding import SeedResult

console = Console()


async def run_seed(container: Container, force: bool) -> SeedResult:
    """Seed through the container's database and close it afterwards."""
    try:
        async with container.db_manager.session_scope() as session:
            return await container.create_seeder().seed(session, force=force)
    finally:
        await container.db_manager.close()


def _render(result: SeedResult) -> None:
    if result.skipped:
        console.print(
            Panel(
                "[yellow]Catalog already has videos, nothing seeded.[/yellow]\n"
                "Use --force to seed anyway.",
                title="Seed",
                border_style="yellow",
            )
        )
        return

    table = Table(title="Seeded records")
    table.add_column("Type", style="cyan")
    table.add_column("Created", justify="right", style="green")
    table.add_row("Categories", str(result.categories))
    table.add_row("Producers", str(result.producers))
    table.add_row("Videos", str(result.videos))
    console.print(table)
    console.print(f"[dim]Completed in {result.duration_seconds:.2f}s[/dim]")


def seed(
    force: bool = typer.Option(
        False,
        "--force",
        help="Seed even if the catalog already has videos",
    ),
) -> None:
    """
    Seed the demo catalog.

    Examples:
        nudex-catalog seed
        nudex-catalog seed --force
    """
    try:
        result = asyncio.run(run_seed(Container(), force))
    except Exception as e:
        console.print(f"[red]❌ Seeding failed: {e}[/red]")
        raise typer.Exit(code=EXIT_CODE_DATABASE_ERROR)
    _render(result)
