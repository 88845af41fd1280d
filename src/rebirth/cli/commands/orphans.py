"""
Rebirth orphan commands.

List, prune or restore document nodes whose parent no longer exists.
"""

import json
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from rebirth.cli.commands.helpers.context_factory import open_repair_context
from rebirth.nodes.domain.dimensions import format_dimensions
from rebirth.nodes.domain.models import Node
from rebirth.orphans.application.orphan_finder import OrphanFinder
from rebirth.orphans.application.repair_runner import RepairRunner
from rebirth.orphans.domain.models import RepairOutcome, RepairReport
from rebirth.shared.domain.exceptions import RebirthError
from rebirth.shared.infrastructure.logging import get_logger

app = typer.Typer(no_args_is_help=True)
console = Console()
logger = get_logger(__name__)

NO_ORPHANS_MESSAGE = "[bold]No orphaned document nodes[/bold]"

WorkspaceOption = typer.Option("live", "--workspace", "-w", help="Workspace to scan")
DimensionsOption = typer.Option(
    None, "--dimensions", "-d", help='Dimension combination as JSON, e.g. \'{"language": ["en_US"]}\''
)
TypeOption = typer.Option(None, "--type", "-t", help="Node (super)type to include, defaults to the document type")
DatabaseOption = typer.Option(None, "--database-url", help="Database URL, overrides REBIRTH_DATABASE_URL")

_OUTCOME_STYLE = {
    RepairOutcome.PRUNED: "green",
    RepairOutcome.RESTORED: "green",
    RepairOutcome.SKIPPED_MISSING_TARGET: "yellow",
    RepairOutcome.SKIPPED_ERROR: "red",
}


def _fail(error: RebirthError) -> NoReturn:
    console.print(f"[red]Error:[/red] {error}")
    logger.error("command_failed", error=str(error), error_type=type(error).__name__, context=error.context)
    raise typer.Exit(code=1)


def _node_table(nodes: list[Node]) -> Table:
    table = Table(title="Orphaned nodes", show_lines=True)
    table.add_column("Site", style="cyan")
    table.add_column("Dimension")
    table.add_column("Identifier", style="dim")
    table.add_column("Node Type")
    table.add_column("Info")

    for node in nodes:
        table.add_row(
            node.site,
            format_dimensions(node.dimension_values),
            node.identifier,
            node.node_type,
            f"Label: {node.label}\nPath: {node.path}",
        )
    return table


def _print_report(report: RepairReport) -> None:
    if not report.processed:
        console.print(NO_ORPHANS_MESSAGE)
        return

    for result in report.results:
        node = result.node
        style = _OUTCOME_STYLE[result.outcome]
        console.print(
            f"{node.identifier} [yellow]{node.label}[/yellow] ({node.node_type}) in [bold]{result.original_path}[/bold]"
        )
        console.print(f"  [{style}]{result.outcome.value}: {result.message}[/{style}]")

    console.print(f"[bold]Processed nodes:[/bold] {report.processed}")
    skipped = report.processed - report.succeeded
    if skipped:
        console.print(f"[yellow]Skipped nodes:[/yellow] {skipped}")


@app.command("list")
def list_command(
    workspace: str = WorkspaceOption,
    dimensions: Optional[str] = DimensionsOption,
    node_type: Optional[str] = TypeOption,
    as_json: bool = typer.Option(False, "--json", help="Print nodes as JSON instead of a table"),
    database_url: Optional[str] = DatabaseOption,
):
    """
    List orphaned document nodes.

    Example:
        rebirth orphans list --workspace user-admin --dimensions '{"language": ["de"]}'
    """
    try:
        with open_repair_context(database_url) as context:
            nodes = OrphanFinder().list_orphans(context, workspace, dimensions, node_type)
    except RebirthError as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps([n.to_json() for n in nodes], indent=2))
        return

    if nodes:
        console.print(_node_table(nodes))
        console.print(f"[bold]Found nodes:[/bold] {len(nodes)}")
    else:
        console.print(NO_ORPHANS_MESSAGE)


@app.command("prune-all")
def prune_all_command(
    workspace: str = WorkspaceOption,
    dimensions: Optional[str] = DimensionsOption,
    node_type: Optional[str] = TypeOption,
    database_url: Optional[str] = DatabaseOption,
):
    """
    Delete all orphaned document nodes, including their subtrees.

    This cannot be undone.
    """
    try:
        with open_repair_context(database_url) as context:
            report = RepairRunner().prune_all(context, workspace, dimensions, node_type)
    except RebirthError as e:
        _fail(e)

    _print_report(report)


@app.command("restore-all")
def restore_all_command(
    workspace: str = WorkspaceOption,
    dimensions: Optional[str] = DimensionsOption,
    node_type: Optional[str] = TypeOption,
    target: Optional[str] = typer.Option(None, "--target", help="Identifier of the document to restore into"),
    auto_create_target: bool = typer.Option(
        False, "--auto-create-target", help="Create the restore container if the site has none"
    ),
    database_url: Optional[str] = DatabaseOption,
):
    """
    Restore orphaned document nodes below a target document.

    Without --target each node goes to the restore container of its site.
    Nodes that cannot be restored are reported and skipped.
    """
    try:
        with open_repair_context(database_url) as context:
            report = RepairRunner().restore_all(
                context, workspace, dimensions, node_type, target, auto_create_target
            )
    except RebirthError as e:
        _fail(e)

    _print_report(report)
