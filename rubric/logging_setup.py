"""Process-wide logging for the Rubric Questionnaire Service.

`configure_logging(level)` installs a single stdout handler on the root logger
and pins the level of the `rubric` package loggers to the configured value.
The level comes from `AppConfig.logging.level` (env `LOG_LEVEL`, then
`config/logging.level`, then `rubric_config.json`).
"""
from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any, Dict

APP_LOGGER = "rubric"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"


def build_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Return the dictConfig mapping for `level`.

    The console handler and the `rubric` logger follow `level`. uvicorn keeps
    its own loggers on the same handler, and SQL echo stays at WARNING.
    """
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": DEFAULT_FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            APP_LOGGER: {"level": level},
            "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "sqlalchemy.engine": {"level": "WARNING"},
        },
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply `level` to the service loggers, installing handlers on first use.

    When the root logger already has handlers (reloaders, pytest capture) no
    handler is added, but the `rubric` logger level is still updated.
    """
    if logging.getLogger().handlers:
        logging.getLogger(APP_LOGGER).setLevel(level.upper())
        return
    dictConfig(build_logging_config(level))


__all__ = ["APP_LOGGER", "build_logging_config", "configure_logging"]
