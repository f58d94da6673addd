"""Logging setup and utilities."""

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Provider SDK and HTTP client chatter
NOISY_LOGGERS = ("anthropic", "httpx", "httpcore")


def setup_logging(level: Optional[str] = None, stream: TextIO = sys.stderr) -> None:
    """Configure root logging for CLI runs.

    ``level`` defaults to the configured ``log_level``.
    """
    if level is None:
        from agent_network.utils.config import get_settings

        level = get_settings().log_level

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(stream)],
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
