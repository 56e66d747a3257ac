"""Logging configuration for the analysis service."""

from __future__ import annotations

import logging
import os
from logging.config import dictConfig
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error")


def build_logging_config(log_level: str, access_log_level: str) -> Dict[str, Any]:
    """Return a ``dictConfig`` mapping that sends service and uvicorn output to one console handler."""
    loggers: Dict[str, Any] = {
        name: {"handlers": ["console"], "level": log_level, "propagate": False}
        for name in UVICORN_LOGGERS
    }
    loggers["uvicorn.access"] = {"handlers": ["console"], "level": access_log_level, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"standard": {"format": LOG_FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": log_level,
            },
        },
        "root": {"handlers": ["console"], "level": log_level},
        "loggers": loggers,
    }


def configure_logging(log_level: Optional[str] = None) -> None:
    """Apply the service logging setup; the level defaults to ``FEEDBACK_LOG_LEVEL``."""
    level = (log_level or os.getenv("FEEDBACK_LOG_LEVEL", "INFO")).upper()
    access_level = os.getenv("UVICORN_ACCESS_LOG_LEVEL", "INFO").upper()
    dictConfig(build_logging_config(level, access_level))
    logging.getLogger(__name__).debug("Logging configured at %s level", level)
