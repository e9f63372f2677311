"""Logging configuration for refillbff."""

import logging
from pathlib import Path
from typing import Optional

import platformdirs
from rich.logging import RichHandler

LOGGER_NAME = "refillbff"
LOG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


def log_path() -> Path:
    """Location of the debug log file."""
    return Path(platformdirs.user_config_dir(LOGGER_NAME)) / "debug.log"


def _file_handler(path: Path) -> Optional[logging.Handler]:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        # Read-only home directories (containers, sandboxed tests)
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(verbose: bool = False, console: bool = False) -> None:
    """Install handlers on the ``refillbff`` logger.

    Debug records always go to the log file. With ``console`` (the
    ``serve`` command) they are also echoed through Rich at INFO, or at
    DEBUG when ``verbose`` is set. Repeated calls are no-ops.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return
    logger.setLevel(logging.DEBUG)

    if console:
        rich_handler = RichHandler(rich_tracebacks=True, show_path=False)
        rich_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        logger.addHandler(rich_handler)

    path = log_path()
    file_handler = _file_handler(path)
    if file_handler is None:
        logger.addHandler(logging.NullHandler())
        return
    logger.addHandler(file_handler)
    logger.debug("Logging initialized → %s", path)
