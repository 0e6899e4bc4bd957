"""Reporting hooks for the indexing engine.

The engine never touches a global logger directly; it reports through a
Reporter so tests and embedding applications can capture warnings
without configuring logging.
"""

import logging
from typing import Protocol

logger = logging.getLogger("folder_index.indexing")


class Reporter(Protocol):
    """Sink for progress and warning messages emitted during indexing."""

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


class LoggingReporter:
    """Reporter that forwards messages to a standard library logger."""

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target or logger

    def info(self, message: str) -> None:
        self._logger.info("%s", message)

    def warning(self, message: str) -> None:
        self._logger.warning("%s", message)
