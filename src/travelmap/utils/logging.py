"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide helper to obtain namespaced loggers.
    - Allow an optional verbose mode for the CLI.

Notes/Edge cases:
    - Library modules only ever attach a ``NullHandler``; output is opt-in.
    - Configuration is idempotent: calling :func:`configure_logging` twice does
      not duplicate handlers.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "travelmap"


class _StderrHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Stream handler bound to whatever ``sys.stderr`` is at emit time."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stderr
        super().emit(record)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger living under the package namespace."""

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in root.handlers):
        root.addHandler(logging.NullHandler())
    if not name or name == ROOT_LOGGER_NAME:
        return root
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Install a single stderr handler on the package logger.

    ``verbose`` selects ``DEBUG`` instead of ``WARNING``.
    """

    root = get_logger()
    level = logging.DEBUG if verbose else logging.WARNING
    handler = next((h for h in root.handlers if isinstance(h, _StderrHandler)), None)
    if handler is None:
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
    handler.setLevel(level)
    root.setLevel(level)
    return root


__all__ = ["ROOT_LOGGER_NAME", "configure_logging", "get_logger"]
