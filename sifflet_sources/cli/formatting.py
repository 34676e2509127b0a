"""Rich formatting utilities for CLI output.

Panels for errors, warnings and successes, diagnostics rendering, and
syntax-highlighted JSON/YAML blocks.
"""

from __future__ import annotations

from rich.panel import Panel
from rich.syntax import Syntax

from sifflet_sources.diagnostics import Diagnostic, Diagnostics, Severity

PANEL_WIDTH = 78


def _panel(color: str, title: str, message: str, context: str | None) -> Panel:
    content = f"[bold {color}]{message}[/bold {color}]"
    if context:
        content += f"\n\n[dim]{context}[/dim]"
    return Panel(
        content,
        title=f"[bold {color}]{title}[/bold {color}]",
        border_style=color,
        width=PANEL_WIDTH,
        expand=False,
    )


def format_error(message: str, context: str | None = None) -> Panel:
    """Create formatted error panel.

    Args:
        message: Error message
        context: Optional context hint for resolution
    """
    return _panel("red", "Error", message, context)


def format_warning(message: str, context: str | None = None) -> Panel:
    """Create formatted warning panel."""
    return _panel("yellow", "Warning", message, context)


def format_success(message: str, details: str | None = None) -> Panel:
    """Create formatted success panel."""
    return _panel("green", "Success", f"✓ {message}", details)


def format_diagnostic(diagnostic: Diagnostic) -> Panel:
    """Render one diagnostic as an error or warning panel."""
    if diagnostic.severity is Severity.ERROR:
        return format_error(diagnostic.summary, diagnostic.detail or None)
    return format_warning(diagnostic.summary, diagnostic.detail or None)


def format_diagnostics(diagnostics: Diagnostics) -> list[Panel]:
    """Render diagnostics in order, errors and warnings alike."""
    return [format_diagnostic(d) for d in diagnostics]


def syntax_block(code: str, lexer: str) -> Syntax:
    """Syntax-highlighted block for JSON or YAML output."""
    return Syntax(
        code,
        lexer,
        theme="monokai",
        background_color="default",
        word_wrap=True,
    )
