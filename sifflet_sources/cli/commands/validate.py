"""Validate command - check a source definition and show its API request."""

from __future__ import annotations

import json
from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.console import Console

from sifflet_sources.cli import RichCommand, format_diagnostics, format_success
from sifflet_sources.cli.formatting import syntax_block
from sifflet_sources.cli.utils import fail, get_state, load_yaml_file
from sifflet_sources.domain.source import SourceModel
from sifflet_sources.handlers.registry import default_registry
from sifflet_sources.sources import SourceService

console = Console()


@click.command(cls=RichCommand)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--update",
    is_flag=True,
    help="Build an update request instead of a create request",
)
@click.pass_context
def validate(ctx: click.Context, file: Path, update: bool) -> None:
    """Validate the source definition in FILE.

    Checks that:
    - the YAML parses into a source
    - exactly one parameters block is set
    - the credential matches what the source type expects

    Then prints the JSON request body that would be sent to the API.

    ## Examples

        $ sifflet-sources validate source.yml
        $ sifflet-sources validate --update source.yml
    """
    state = get_state(ctx)

    try:
        source = SourceModel.model_validate(load_yaml_file(file))
    except yaml.YAMLError as e:
        fail(console, "YAML parsing error", str(e), debug=state.debug)
    except ValidationError as e:
        fail(console, "Source validation error", str(e), debug=state.debug)

    service = SourceService(default_registry())
    build = service.build_update_request if update else service.build_create_request
    request, diagnostics = service.diagnose(
        "Unable to update source" if update else "Unable to create source",
        lambda: build(source),
    )

    for panel in format_diagnostics(diagnostics):
        console.print(panel)
    if request is None:
        raise click.ClickException(f"{file} is not a valid source definition")

    body = json.dumps(json.loads(request.marshal()), indent=2)
    console.print(syntax_block(body, "json"))
    source_type = request.parameters.type or ""
    console.print(format_success(f"{file.name} is a valid {source_type} source"))
