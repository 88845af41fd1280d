"""
Rebirth workspace commands.

Show workspaces and the chain of base workspaces nodes are resolved through.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from rebirth.cli.commands.helpers.context_factory import open_repair_context
from rebirth.orphans.application.context import RepairContext
from rebirth.orphans.application.orphan_finder import resolve_workspace_chain
from rebirth.shared.domain.exceptions import RebirthError

app = typer.Typer(no_args_is_help=True)
console = Console()


def _chain(context: RepairContext, name: str) -> str:
    try:
        return " -> ".join(resolve_workspace_chain(context.store, name))
    except RebirthError as e:
        return f"[red]{e}[/red]"


@app.command("list")
def list_command(
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Database URL, overrides REBIRTH_DATABASE_URL"),
):
    """List workspaces with their resolved base workspace chain."""
    rows = []
    try:
        with open_repair_context(database_url) as context:
            for workspace in context.store.list_workspaces():
                rows.append((workspace.name, workspace.base_workspace or "-", workspace.title, _chain(context, workspace.name)))
    except RebirthError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    if not rows:
        console.print("[yellow]No workspaces found[/yellow]")
        return

    table = Table(title="Workspaces")
    table.add_column("Name", style="cyan")
    table.add_column("Base")
    table.add_column("Title", style="dim")
    table.add_column("Chain")
    for row in rows:
        table.add_row(*row)
    console.print(table)
