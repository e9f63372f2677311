"""Configure command implementation."""

from typing import Optional

import typer
from rich.console import Console
from rich.prompt import Confirm

from refillbff.cli.ui import create_config_table, error_panel, success_panel
from refillbff.core.config import ConfigManager
from refillbff.core.keychain import TokenKeychain
from refillbff.exceptions import ConfigError

console = Console()


def run_configure(
    hubspot_token: Optional[str] = None,
    stripe_key: Optional[str] = None,
    port: Optional[int] = None,
    origin: Optional[str] = None,
    show: bool = False,
    reset: bool = False,
) -> None:
    """Run the configure command."""
    manager = ConfigManager()

    if reset:
        _reset(manager)
        return

    try:
        config = manager.load()
    except ConfigError as e:
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)

    if hubspot_token or stripe_key:
        TokenKeychain.store(hubspot_token=hubspot_token, stripe_secret_key=stripe_key)
        console.print(success_panel("Secrets saved to the OS keychain."))

    updates = {}
    if port:
        updates["port"] = port
    if origin:
        updates["allowed_origin"] = origin
    if updates:
        config = config.model_copy(update=updates)
        manager.save(config)
        console.print(success_panel(f"Settings saved to {manager.config_path}"))

    if show or not (hubspot_token or stripe_key or updates):
        console.print(create_config_table(manager.load()))


def _reset(manager: ConfigManager) -> None:
    if not Confirm.ask("Remove saved settings and keychain secrets?", default=False):
        console.print("Cancelled.")
        return
    manager.delete()
    TokenKeychain.delete()
    console.print(success_panel("Settings and secrets removed."))
