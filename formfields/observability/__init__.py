"""Logging helpers."""

from .logging import configure_logging, get_logger, log_field_event

__all__ = ["configure_logging", "get_logger", "log_field_event"]
