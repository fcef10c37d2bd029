"""
Logging setup for API Studio.

Modules log through ``logging.getLogger(__name__)``; this module only
installs handlers and levels for the ``api_studio`` logger tree.
"""

import logging
import logging.config
import sys
from typing import Any

from .config import get_settings


def setup_logging(level: str | None = None) -> None:
    """
    Configure console logging.

    Args:
        level: Logging level name; falls back to the configured ``log_level``
    """
    level = (level or get_settings().log_level).upper()

    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "standard",
                "stream": sys.stdout,
            }
        },
        "loggers": {
            "api_studio": {"level": level, "handlers": ["console"], "propagate": False},
            "httpx": {"level": "WARNING", "handlers": ["console"], "propagate": False},
        },
        "root": {"level": "WARNING", "handlers": ["console"]},
    }

    logging.config.dictConfig(logging_config)
