"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(level: str = "info") -> None:
    """Route the root logger through rich. Library modules only create loggers."""
    logging.basicConfig(
        level=_LEVELS.get(level.lower(), logging.INFO),
        format="%(message)s",
        handlers=[
            RichHandler(
                rich_tracebacks=True,
                show_path=False,
                log_time_format="%H:%M:%S",
            )
        ],
        force=True,
    )
