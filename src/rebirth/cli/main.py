"""
Rebirth CLI
Main entry point for the command-line interface

Usage:
    rebirth orphans list            # List orphaned document nodes
    rebirth orphans prune-all       # Delete orphaned document nodes
    rebirth orphans restore-all     # Move orphaned document nodes below a target
    rebirth workspaces list         # Show workspaces and their base chains
"""

import typer
from rich.console import Console
from rich.panel import Panel

from rebirth import __version__
from rebirth.cli.commands import orphans, workspaces
from rebirth.shared.infrastructure.logging import configure_logging

app = typer.Typer(
    name="rebirth",
    help="Rebirth - find and repair orphaned nodes in a content tree",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

# Register commands
app.add_typer(orphans.app, name="orphans", help="List, prune or restore orphaned document nodes")
app.add_typer(workspaces.app, name="workspaces", help="Inspect workspaces and their base workspaces")


@app.callback()
def setup() -> None:
    """Configure logging before any command runs."""
    configure_logging()


@app.command()
def version():
    """Show Rebirth version information"""
    console.print(Panel.fit(
        "[bold cyan]Rebirth[/bold cyan]\n"
        f"[dim]Version:[/dim] {__version__}\n",
        title="About Rebirth",
        border_style="cyan"
    ))


def main():
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
