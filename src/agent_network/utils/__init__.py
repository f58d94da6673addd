"""Configuration and logging helpers."""

from agent_network.utils.config import Settings, get_settings
from agent_network.utils.logging import get_logger, setup_logging

__all__ = ["Settings", "get_settings", "get_logger", "setup_logging"]
