"""Logging configuration helpers."""

from __future__ import annotations

import logging
import logging.config
from typing import Any

import structlog

from .config import LoggingSettings

# Third-party loggers that log every request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore")


def _formatter_for(settings: LoggingSettings) -> dict[str, Any]:
    """Return the dictConfig formatter fragment matching ``settings``.

    Structured output renders one JSON object per record through structlog,
    so messages carrying quotes or newlines stay valid JSON.
    """
    if settings.structured:
        return {
            "()": structlog.stdlib.ProcessorFormatter,
            "foreign_pre_chain": [
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
            ],
            "processors": [
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
        }
    return {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"}


def configure_logging(settings: LoggingSettings) -> None:
    """Configure application logging according to provided settings."""
    dict_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": _formatter_for(settings)},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": settings.level,
            },
        },
        "loggers": {
            name: {"level": "WARNING", "propagate": True} for name in _NOISY_LOGGERS
        },
        "root": {
            "handlers": ["console"],
            "level": settings.level,
        },
    }

    logging.config.dictConfig(dict_config)


__all__ = ["configure_logging"]
