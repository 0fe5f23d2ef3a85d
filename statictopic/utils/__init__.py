"""Ambient utilities: configuration and structured logging."""

from statictopic.utils.config import Config, get_config, reset_config
from statictopic.utils.logging import configure_logging, get_logger

__all__ = [
    "Config",
    "get_config",
    "reset_config",
    "configure_logging",
    "get_logger",
]
