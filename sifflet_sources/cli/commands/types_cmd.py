"""Types command - list supported source types."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from sifflet_sources.cli import RichCommand
from sifflet_sources.handlers.registry import default_registry

console = Console()


@click.command(cls=RichCommand)
def types() -> None:
    """List supported source types.

    Shows the configuration tag, the API tag and whether a credential is
    required for each source type.

    ## Examples

        $ sifflet-sources types
    """
    table = Table(title="Source types")
    table.add_column("Type", style="cyan")
    table.add_column("API type")
    table.add_column("Credential")

    for handler in default_registry().handlers():
        table.add_row(
            handler.schema_tag(),
            handler.wire_tag(),
            "required" if handler.requires_credential() else "[dim]none[/dim]",
        )

    console.print(table)
