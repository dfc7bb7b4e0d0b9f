"""Logging setup.

Stdout carries the stdio transport, so console output goes to stderr through
rich; a log file, when configured, replaces the console handler.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

console = Console(stderr=True)


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger and return it."""
    logger = logging.getLogger("gemara_mcp")
    logger.handlers.clear()
    logger.propagate = False

    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.setLevel(logging.DEBUG)
    else:
        handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    logger.addHandler(handler)
    return logger
