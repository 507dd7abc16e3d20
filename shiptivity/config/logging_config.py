"""Uvicorn ``log_config`` sharing the application's structlog rendering."""

from typing import Any

import structlog

from shiptivity.utils.logger import FOREIGN_PRE_CHAIN, build_renderer, logging_options


def get_logging_config() -> dict[str, Any]:
    """Build the dictConfig passed to uvicorn from the LOG_* environment."""
    log_format, log_colors, log_level = logging_options()

    def _logger(level: int | str) -> dict[str, Any]:
        return {"handlers": ["console"], "level": level, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structlog": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": build_renderer(log_format, log_colors),
                "foreign_pre_chain": FOREIGN_PRE_CHAIN,
            },
        },
        "handlers": {
            "console": {
                "formatter": "structlog",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "uvicorn": _logger(log_level),
            "uvicorn.error": _logger(log_level),
            # Request lines are logged by the app middleware
            "uvicorn.access": _logger("WARNING"),
            "sqlalchemy.engine": _logger("WARNING"),
        },
    }
