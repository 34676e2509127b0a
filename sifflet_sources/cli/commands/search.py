"""Search command - list sources matching a filter."""

from __future__ import annotations

import click
import httpx
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from sifflet_sources.cli import RichCommand
from sifflet_sources.cli.utils import fail, get_state
from sifflet_sources.client import DEFAULT_MAX_RESULTS, SiffletAPIError, SiffletClient
from sifflet_sources.config import load_config
from sifflet_sources.credentials import SIFFLET_TOKEN_ENV, TokenStore
from sifflet_sources.domain.source import SourceFilter, TagReference
from sifflet_sources.errors import SourceParametersError
from sifflet_sources.handlers.registry import default_registry
from sifflet_sources.sources import SourceService

console = Console()


@click.command(cls=RichCommand)
@click.option("--text", "text_search", help="Return sources whose name matches this text")
@click.option(
    "--type",
    "source_types",
    multiple=True,
    help="Source type to filter by, e.g. bigquery (repeatable)",
)
@click.option("--tag", "tag_names", multiple=True, help="Tag name to filter by (repeatable)")
@click.option(
    "--max-results",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_RESULTS,
    show_default=True,
    help="Maximum number of sources to return",
)
@click.pass_context
def search(
    ctx: click.Context,
    text_search: str | None,
    source_types: tuple[str, ...],
    tag_names: tuple[str, ...],
    max_results: int,
) -> None:
    """Search sources and print them as a table.

    ## Examples

        $ sifflet-sources search --type snowflake --type bigquery
        $ sifflet-sources search --text warehouse --tag finance --max-results 20
    """
    state = get_state(ctx)
    service = SourceService(default_registry())

    try:
        search_filter = service.build_search_filter(
            SourceFilter(
                text_search=text_search,
                types=list(source_types),
                tags=[TagReference(name=name) for name in tag_names],
            )
        )
    except SourceParametersError as e:
        fail(
            console,
            "Invalid search filter",
            f"{e}\nRun 'sifflet-sources types' to list supported types.",
            debug=state.debug,
        )

    try:
        config = load_config(state.config_path)
    except (FileNotFoundError, ValidationError) as e:
        fail(console, "Invalid configuration", str(e), debug=state.debug)

    token = TokenStore().get()
    if not token:
        fail(
            console,
            "No Sifflet API token found",
            f"Set {SIFFLET_TOKEN_ENV} or run 'sifflet-sources auth login'",
            debug=state.debug,
        )

    try:
        with SiffletClient(config, token) as client:
            sources = [
                service.read_source(item)
                for item in client.iter_sources(search_filter, max_results=max_results)
            ]
    except SiffletAPIError as e:
        fail(console, "Unable to read sources", str(e), debug=state.debug)
    except httpx.HTTPError as e:
        fail(console, "Could not reach the Sifflet API", str(e), debug=state.debug)
    except (SourceParametersError, ValidationError) as e:
        fail(
            console,
            "Unable to read sources: could not parse API response",
            str(e),
            debug=state.debug,
        )

    if not sources:
        console.print("[yellow]No sources match the filter[/yellow]")
        return

    table = Table(title=f"Sources ({len(sources)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Type")

    for source in sources:
        table.add_row(str(source.id), source.name, source.parameters.source_type or "")

    console.print(table)
