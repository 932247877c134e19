"""Utility helpers shared across the package."""

from .logging import get_log_path, get_logger, setup_logging

__all__ = ["setup_logging", "get_logger", "get_log_path"]
