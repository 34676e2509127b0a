"""CLI commands for sifflet-sources.

Commands are registered on the root group in __main__.py.
"""

from __future__ import annotations

from sifflet_sources.cli.commands.auth import auth
from sifflet_sources.cli.commands.decode import decode
from sifflet_sources.cli.commands.get_cmd import get
from sifflet_sources.cli.commands.plan import plan
from sifflet_sources.cli.commands.schema import schema
from sifflet_sources.cli.commands.search import search
from sifflet_sources.cli.commands.types_cmd import types
from sifflet_sources.cli.commands.validate import validate

__all__ = [
    "auth",
    "decode",
    "get",
    "plan",
    "schema",
    "search",
    "types",
    "validate",
]
