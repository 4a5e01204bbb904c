"""Console and logging helpers for the loggo CLI.

Host output goes to stderr. Stdout belongs to the plugin being run.
"""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Attach a Rich handler to the ``loggo`` logger and set its level.

    Safe to call more than once; later calls only change the level.
    """
    logger = logging.getLogger("loggo")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=err_console,
            show_path=False,
            show_time=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
