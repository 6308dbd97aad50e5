"""Utility modules."""

from .config import Settings, load_config
from .logging import setup_logging, setup_logging_from_config

__all__ = ["Settings", "load_config", "setup_logging", "setup_logging_from_config"]
