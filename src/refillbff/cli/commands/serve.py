"""Serve command implementation."""

import logging
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from refillbff.cli.ui import create_config_table, error_panel
from refillbff.core.config import ConfigManager
from refillbff.exceptions import ConfigError
from refillbff.logging import setup_logging

logger = logging.getLogger(__name__)
console = Console()


def run_serve(
    host: Optional[str] = None,
    port: Optional[int] = None,
    verbose: bool = False,
) -> None:
    """Run the serve command."""
    setup_logging(verbose=verbose, console=True)

    manager = ConfigManager()
    try:
        config = manager.load()
        ConfigManager.require_crm_token(config)
    except ConfigError as e:
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)

    overrides = {}
    if host:
        overrides["host"] = host
    if port:
        overrides["port"] = port
    if overrides:
        config = config.model_copy(update=overrides)

    console.print(create_config_table(config))

    from refillbff.api.app import create_app

    app = create_app(config)
    logger.info("Listening on %s:%s", config.host, config.port)
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level="debug" if verbose else "info",
    )
