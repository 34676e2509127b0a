"""Command-line interface for sifflet-sources."""

from __future__ import annotations

from pathlib import Path

import click

from sifflet_sources.cli import RichGroup
from sifflet_sources.cli.commands import (
    auth,
    decode,
    get,
    plan,
    schema,
    search,
    types,
    validate,
)
from sifflet_sources.cli.utils import CliState
from sifflet_sources.config import LOG_LEVELS
from sifflet_sources.logging_config import configure_logging


@click.group(cls=RichGroup)
@click.version_option(package_name="sifflet-sources")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to sifflet.yml config file (auto-detected if not specified)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log level for diagnostic output on stderr",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Show full exception stacktraces and debug logs",
)
@click.pass_context
def cli(ctx: click.Context, config: Path | None, log_level: str, debug: bool) -> None:
    """Work with Sifflet source parameters.

    Inspect supported source types, validate source definitions, decode API
    payloads and check whether a change forces a source replacement.

        $ sifflet-sources types
        $ sifflet-sources validate source.yml
    """
    configure_logging("DEBUG" if debug else log_level)
    ctx.obj = CliState(debug=debug, config_path=config)


cli.add_command(types)
cli.add_command(schema)
cli.add_command(decode)
cli.add_command(validate)
cli.add_command(plan)
cli.add_command(get)
cli.add_command(search)
cli.add_command(auth)


if __name__ == "__main__":
    cli()
