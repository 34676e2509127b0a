"""CLI utility functions for sifflet-sources."""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NoReturn

import click
import yaml
from rich.console import Console

from sifflet_sources.cli.formatting import format_error
from sifflet_sources.domain.parameters import ParametersModel
from sifflet_sources.domain.source import SourceModel


@dataclass
class CliState:
    """Options of the root command, shared with subcommands."""

    debug: bool = False
    config_path: Path | None = None


def get_state(ctx: click.Context) -> CliState:
    return ctx.find_object(CliState) or CliState()


def fail(
    console: Console,
    message: str,
    context: str | None = None,
    debug: bool = False,
) -> NoReturn:
    """Print an error panel (and the traceback in debug mode), then abort."""
    if debug:
        console.print(traceback.format_exc())
    console.print(format_error(message, context))
    raise click.ClickException(message)


def load_yaml_file(path: Path) -> Any:
    """Parse a YAML (or JSON) file."""
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def dump_yaml(data: Any) -> str:
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)


def parameters_to_data(container: ParametersModel) -> dict[str, Any]:
    """Plain data of a parameters block, unset slots omitted."""
    return container.model_dump(mode="json", by_alias=True, exclude_none=True)


def source_to_data(source: SourceModel) -> dict[str, Any]:
    return source.model_dump(mode="json", by_alias=True, exclude_none=True)
