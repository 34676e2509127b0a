"""Schema command - show the parameters of one source type."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from sifflet_sources.cli import RichCommand
from sifflet_sources.cli.utils import fail, get_state
from sifflet_sources.errors import UnsupportedSourceTypeError
from sifflet_sources.handlers.base import FieldSpec
from sifflet_sources.handlers.registry import default_registry

console = Console()


def _add_rows(table: Table, specs: tuple[FieldSpec, ...], prefix: str = "") -> None:
    for spec in specs:
        kind = spec.kind
        if spec.choices:
            kind = f"enum ({', '.join(spec.choices)})"
        table.add_row(
            f"{prefix}{spec.name}",
            f"{prefix}{spec.wire_name}",
            kind,
            "yes" if spec.required else "[dim]no[/dim]",
            spec.description,
        )
        if spec.children:
            _add_rows(table, spec.children, prefix=f"{prefix}{spec.name}[].")


@click.command(cls=RichCommand)
@click.argument("source_type")
@click.pass_context
def schema(ctx: click.Context, source_type: str) -> None:
    """Show the parameter fields of SOURCE_TYPE.

    ## Examples

        $ sifflet-sources schema bigquery
        $ sifflet-sources schema looker
    """
    state = get_state(ctx)
    try:
        handler = default_registry().lookup(source_type.lower())
    except UnsupportedSourceTypeError as e:
        fail(
            console,
            str(e),
            "Run 'sifflet-sources types' to list supported types",
            debug=state.debug,
        )

    shape = handler.field_shape()
    table = Table(title=f"{shape.source_type} parameters")
    table.add_column("Field", style="cyan")
    table.add_column("API field")
    table.add_column("Type")
    table.add_column("Required")
    table.add_column("Description", overflow="fold")
    _add_rows(table, shape.fields)

    console.print(table)
    credential = "required" if handler.requires_credential() else "not accepted"
    console.print(f"Credential: {credential}")
