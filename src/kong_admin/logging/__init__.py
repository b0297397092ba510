"""Logging configuration for kong_admin."""

from kong_admin.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
