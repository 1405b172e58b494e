"""Centralised logging helpers for form fields."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from formfields.config import get_settings

_LOGGER_CACHE: Dict[str, logging.Logger] = {}
_LOGGING_CONFIGURED = False


def get_logger(name: str = "formfields") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a console handler to the package logger.

    The level falls back to ``FORMFIELDS_LOG_LEVEL``. Calling again without
    an explicit level is a no-op.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED and not level:
        return
    log_level = (level or get_settings().log_level or "WARNING").upper()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    package_logger = get_logger()
    package_logger.handlers = [handler]
    package_logger.setLevel(getattr(logging, log_level, logging.WARNING))
    _LOGGING_CONFIGURED = True


def log_field_event(
    event: str,
    *,
    field: str,
    level: int = logging.DEBUG,
    logger: Optional[logging.Logger] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Emit a structured log entry describing something a field did."""

    payload: Dict[str, Any] = {"field": field or "unknown"}
    if extras:
        payload.update(extras)
    target_logger = logger or get_logger("formfields.events")
    target_logger.log(
        level,
        "%s (%s)",
        event,
        payload["field"],
        extra={"formfields_event": event, "formfields_data": payload},
    )
