"""Auth command group - manage the Sifflet API token."""

from __future__ import annotations

import click
from rich.console import Console

from sifflet_sources.cli import RichCommand, RichGroup
from sifflet_sources.credentials import SERVICE_NAME, SIFFLET_TOKEN_ENV, TokenStore

console = Console()


@click.group(cls=RichGroup)
def auth() -> None:
    """Manage the Sifflet API token.

    The token is read from SIFFLET_TOKEN first, then from the system
    keychain.

    ## Quick Examples

        $ sifflet-sources auth login
        $ sifflet-sources auth status
        $ sifflet-sources auth clear
    """


@auth.command(cls=RichCommand)
@click.option(
    "--token",
    prompt="Sifflet API token",
    hide_input=True,
    help="Token to store (prompted when omitted)",
)
def login(token: str) -> None:
    """Save an API token in the system keychain."""
    if TokenStore().set(token):
        console.print(f"[green]✓[/green] Saved to keychain ({SERVICE_NAME})")
    else:
        console.print(
            "[yellow]Could not save to keychain (keychain unavailable).[/yellow] "
            f"Set {SIFFLET_TOKEN_ENV} instead."
        )
        raise click.ClickException("Keychain unavailable")


@auth.command(cls=RichCommand)
def status() -> None:
    """Show where the API token comes from."""
    source = TokenStore().source()
    if source == "env":
        console.print(f"[green]✓[/green] Token:  from {SIFFLET_TOKEN_ENV}")
    elif source == "keychain":
        console.print("[green]✓[/green] Token:  from keychain")
    else:
        console.print("[dim]○[/dim] Token:  Not configured")


@auth.command(cls=RichCommand)
def clear() -> None:
    """Remove the API token from the system keychain."""
    if TokenStore().delete():
        console.print("[green]✓[/green] Cleared API token")
    else:
        console.print("[dim]○[/dim] API token was not set")
