"""Get command - fetch a source from the API."""

from __future__ import annotations

import click
import httpx
from pydantic import ValidationError
from rich.console import Console

from sifflet_sources.cli import RichCommand
from sifflet_sources.cli.formatting import syntax_block
from sifflet_sources.cli.utils import dump_yaml, fail, get_state, source_to_data
from sifflet_sources.client import SiffletAPIError, SiffletClient
from sifflet_sources.config import load_config
from sifflet_sources.credentials import SIFFLET_TOKEN_ENV, TokenStore
from sifflet_sources.errors import SourceParametersError
from sifflet_sources.handlers.registry import default_registry
from sifflet_sources.sources import SourceService

console = Console()


@click.command(cls=RichCommand)
@click.argument("source_id")
@click.pass_context
def get(ctx: click.Context, source_id: str) -> None:
    """Fetch source SOURCE_ID and print it as configuration.

    Uses the host from sifflet.yml (or SIFFLET_HOST) and the token from
    SIFFLET_TOKEN or the system keychain.

    ## Examples

        $ sifflet-sources get 3f2a8c54-5d0e-4a6f-9b44-2a9d2c1e7b10
    """
    state = get_state(ctx)

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

    service = SourceService(default_registry())
    try:
        with SiffletClient(config, token) as client:
            source = service.read_source(client.get_source(source_id))
    except SiffletAPIError as e:
        fail(console, "Unable to read source", str(e), debug=state.debug)
    except httpx.HTTPError as e:
        fail(console, "Could not reach the Sifflet API", str(e), debug=state.debug)
    except (SourceParametersError, ValidationError) as e:
        fail(
            console,
            "Unable to read source: could not parse API response",
            str(e),
            debug=state.debug,
        )

    console.print(syntax_block(dump_yaml(source_to_data(source)), "yaml"))
