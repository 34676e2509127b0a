"""CLI utilities for sifflet-sources.

Rich-based formatting helpers and Click command classes shared by the
commands in :mod:`sifflet_sources.cli.commands`.
"""

from __future__ import annotations

from sifflet_sources.cli.formatting import (
    format_diagnostics,
    format_error,
    format_success,
    format_warning,
)
from sifflet_sources.cli.help_formatter import RichCommand, RichGroup

__all__ = [
    "format_diagnostics",
    "format_error",
    "format_success",
    "format_warning",
    "RichCommand",
    "RichGroup",
]
