"""Logging de la aplicación.

Un único `RichHandler` en stderr para los árboles de loggers del proyecto;
stdout queda libre para la salida de la CLI.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_TREES = ("core", "adapters", "cli")


def setup_logging(level: str = "WARNING", console: Console | None = None) -> None:
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    resolved = getattr(logging, level.upper(), logging.WARNING)
    for name in _LOGGER_TREES:
        logger = logging.getLogger(name)
        logger.setLevel(resolved)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.propagate = False
