"""Plan command - does a parameters change require replacing the source?"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import yaml
from pydantic import ValidationError
from rich.console import Console

from sifflet_sources.cli import RichCommand, format_diagnostics
from sifflet_sources.cli.utils import fail, get_state, load_yaml_file
from sifflet_sources.domain.parameters import ParametersModel
from sifflet_sources.handlers.registry import default_registry
from sifflet_sources.planner import REPLACE_DESCRIPTION, TypeChangePlanner

console = Console()


def _load_parameters(path: Path, debug: bool) -> ParametersModel | None:
    """Load a parameters block, or the ``parameters`` of a source definition."""
    try:
        data: Any = load_yaml_file(path)
    except yaml.YAMLError as e:
        fail(console, f"YAML parsing error in {path}", str(e), debug=debug)
    if data is None:
        return None
    if isinstance(data, dict) and "parameters" in data:
        data = data["parameters"]
    try:
        return ParametersModel.model_validate(data)
    except ValidationError as e:
        fail(console, f"Invalid parameters in {path}", str(e), debug=debug)


@click.command(cls=RichCommand)
@click.argument("state", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("planned", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def plan(ctx: click.Context, state: Path, planned: Path) -> None:
    """Compare stored parameters in STATE with PLANNED parameters.

    Each file holds either a parameters block or a full source definition.
    An empty file stands for unknown parameters.

    ## Examples

        $ sifflet-sources plan current.yml next.yml
    """
    cli_state = get_state(ctx)
    previous = _load_parameters(state, cli_state.debug)
    following = _load_parameters(planned, cli_state.debug)

    result = TypeChangePlanner(default_registry()).plan(previous, following)

    for panel in format_diagnostics(result.diagnostics):
        console.print(panel)

    previous_type = result.previous_type or "unknown"
    next_type = result.next_type or "unknown"
    console.print(f"Source type: {previous_type} -> {next_type}")
    if result.requires_replace:
        console.print("[bold yellow]Replacement required[/bold yellow]")
        console.print(f"[dim]{REPLACE_DESCRIPTION}[/dim]")
    else:
        console.print("[bold green]In-place update[/bold green]")
