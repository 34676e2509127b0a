"""Decode command - discriminate API parameter payloads."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console

from sifflet_sources.cli import RichCommand
from sifflet_sources.cli.formatting import syntax_block
from sifflet_sources.cli.utils import (
    dump_yaml,
    fail,
    get_state,
    parameters_to_data,
    source_to_data,
)
from sifflet_sources.errors import SourceParametersError
from sifflet_sources.handlers.registry import default_registry
from sifflet_sources.sources import SourceService
from sifflet_sources.wire.decoder import OneOfDecoder

console = Console()


@click.command(cls=RichCommand)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--page",
    is_flag=True,
    help="FILE is a page of sources (totalElements + data) instead of parameters",
)
@click.pass_context
def decode(ctx: click.Context, file: Path, page: bool) -> None:
    """Decode a JSON parameters payload from FILE.

    Finds the single source type the payload matches and prints the
    parameters block it corresponds to, with source_type filled in.

    ## Examples

        $ sifflet-sources decode parameters.json
        $ sifflet-sources decode --page sources.json
    """
    state = get_state(ctx)
    registry = default_registry()
    raw = file.read_bytes()

    try:
        if page:
            result = SourceService(registry).read_page(raw)
            data = {
                "total_elements": result.total_elements,
                "sources": [source_to_data(s) for s in result.sources],
            }
        else:
            decoded = OneOfDecoder.from_registry(registry).decode(raw)
            handler = registry.lookup(decoded.tag)
            container = handler.to_parameters_model(handler.from_dto(decoded.dto))
            data = parameters_to_data(container)
    except SourceParametersError as e:
        fail(console, "Unable to decode parameters", str(e), debug=state.debug)
    except ValidationError as e:
        fail(console, "Invalid API payload", str(e), debug=state.debug)

    console.print(syntax_block(dump_yaml(data), "yaml"))
