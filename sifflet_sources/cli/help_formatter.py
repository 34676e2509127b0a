"""Click command classes with wider help output."""

from __future__ import annotations

import click

HELP_WIDTH = 88


class _WideHelpMixin:
    """Render help with standard Click formatting at HELP_WIDTH columns."""

    def get_help(self, ctx: click.Context) -> str:
        formatter = click.HelpFormatter(width=HELP_WIDTH)
        self.format_help(ctx, formatter)  # type: ignore[attr-defined]
        return formatter.getvalue()


class RichCommand(_WideHelpMixin, click.Command):
    """Command with wide help output."""


class RichGroup(_WideHelpMixin, click.Group):
    """Group with wide help output."""
