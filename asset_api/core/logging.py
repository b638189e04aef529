"""Logging setup applied once at application startup."""

from __future__ import annotations

import logging
import logging.config

from asset_api.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    level = settings.logging.level.upper()
    if settings.debug:
        level = "DEBUG"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {"handlers": ["console"], "level": "WARNING"},
            "loggers": {
                "asset_api": {"level": level},
                "sqlalchemy.engine": {"level": "INFO" if settings.database.echo else "WARNING"},
            },
        }
    )
    logging.getLogger(__name__).debug("Logging configured at level %s", level)


__all__ = ["configure_logging", "LOG_FORMAT"]
