"""Centralized logging configuration for Thumbforge."""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

_LOG_LEVEL_ENV: Final[str] = "THUMBFORGE_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console()


def _resolve_level() -> int:
    """Return the logging level defined via environment variable."""
    level_name = os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME).upper()
    level = getattr(logging, level_name, logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    """Configure logging once with a Rich handler."""
    root_logger = logging.getLogger()
    level = _resolve_level()

    managed = [
        handler
        for handler in root_logger.handlers
        if isinstance(handler, RichHandler) and getattr(handler, "_thumbforge_managed", False)
    ]

    if not managed:
        root_logger.handlers.clear()
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._thumbforge_managed = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

    root_logger.setLevel(level)

    # The SDK's HTTP stack logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.captureWarnings(True)
