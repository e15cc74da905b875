"""Core utilities and configuration."""

from .config import Config, load_config
from .utils import setup_logging

__all__ = ["Config", "load_config", "setup_logging"]
