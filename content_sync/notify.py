"""Notification sinks for user-facing sync messages."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from rich.console import Console

logger = logging.getLogger(__name__)


@runtime_checkable
class Notifier(Protocol):
    """Receives short human-readable messages as a sync progresses."""

    def notify(self, message: str) -> None: ...


class ConsoleNotifier:
    """Prints each message on its own line, like a toast in the host app."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def notify(self, message: str) -> None:
        style = "red" if message.startswith("Error:") else None
        self.console.print(message, style=style, markup=False, highlight=False)


class LoggingNotifier:
    def notify(self, message: str) -> None:
        if message.startswith("Error:"):
            logger.error(message)
        else:
            logger.info(message)
