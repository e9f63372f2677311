"""Main CLI application."""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from refillbff import __version__

app = typer.Typer(
    name="refillbff",
    help="Run and inspect the refill app's backend-for-frontend.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
    ),
) -> None:
    """refillbff - HubSpot and Stripe proxy for the refill iOS app."""
    if version:
        console.print(f"refillbff v{__version__}")
        raise typer.Exit()


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Start the API server."""
    from refillbff.cli.commands.serve import run_serve

    run_serve(host=host, port=port, verbose=verbose)


@app.command()
def decode(
    source: str = typer.Argument("-", help="File holding a note body, or '-' for stdin"),
) -> None:
    """Decode vehicles from a stored note body."""
    from refillbff.cli.commands.inspect import run_decode

    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.exists():
            from refillbff.cli.ui import error_panel

            console.print(error_panel(f"File not found: {source}"))
            raise typer.Exit(1)
        text = path.read_text(encoding="utf-8")

    run_decode(text)


@app.command()
def subject(
    text: str = typer.Argument(..., help="Task subject, e.g. '(1) Refill request - Truck'"),
) -> None:
    """Show the status encoded in a task subject."""
    from refillbff.cli.commands.inspect import run_subject

    run_subject(text)


@app.command()
def configure(
    hubspot_token: Optional[str] = typer.Option(
        None, "--hubspot-token", help="Store HubSpot token in the keychain"
    ),
    stripe_key: Optional[str] = typer.Option(
        None, "--stripe-key", help="Store Stripe secret key in the keychain"
    ),
    port: Optional[int] = typer.Option(None, "--port", help="Default listen port"),
    origin: Optional[str] = typer.Option(None, "--origin", help="Allowed CORS origin"),
    show: bool = typer.Option(False, "--show", help="Print effective settings"),
    reset: bool = typer.Option(False, "--reset", help="Remove saved settings and secrets"),
) -> None:
    """Save settings and secrets for the server."""
    from refillbff.cli.commands.configure import run_configure

    run_configure(
        hubspot_token=hubspot_token,
        stripe_key=stripe_key,
        port=port,
        origin=origin,
        show=show,
        reset=reset,
    )


if __name__ == "__main__":
    app()
