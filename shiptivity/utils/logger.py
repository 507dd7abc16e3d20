"""Structured logging for the Shiptivity API using structlog."""

import logging
import os

import structlog
from structlog.types import FilteringBoundLogger

# Applied to records coming from stdlib loggers (uvicorn, SQLAlchemy)
FOREIGN_PRE_CHAIN = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
]


def logging_options() -> tuple[str, bool, int]:
    """Read (format, colors, level) from LOG_FORMAT, LOG_COLORS and LOG_LEVEL."""
    log_format = os.getenv("LOG_FORMAT", "pretty").lower()
    log_colors = os.getenv("LOG_COLORS", "true").lower() in ("true", "1", "yes", "on")
    log_level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    return log_format, log_colors, log_level


def build_renderer(log_format: str, log_colors: bool):
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=log_colors)


def configure_structlog():
    """Configure structlog and the root logger from the LOG_* environment.

    stdlib logging is routed through structlog so uvicorn and SQLAlchemy
    records come out structured and obey the same levels. Safe to call
    again once settings have been resolved.
    """
    log_format, log_colors, log_level = logging_options()

    logging.root.handlers = []
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=build_renderer(log_format, log_colors),
            foreign_pre_chain=FOREIGN_PRE_CHAIN,
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(log_level)

    logging.captureWarnings(True)

    # SQL echo is too chatty at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_structlog()


def request_log(
    logger: FilteringBoundLogger,
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    **kwargs,
):
    """Log HTTP request with details."""
    logger.info(
        f"{method} {path} - {status_code}",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
        **kwargs,
    )


def get_logger(name: str, level: int | None = None) -> FilteringBoundLogger:
    """Get a configured structlog logger.

    Without ``level`` the logger follows the root level set from LOG_LEVEL.
    """
    if level is not None:
        logging.getLogger(name).setLevel(level)
    return structlog.get_logger(name)


logger = get_logger("shiptivity")
api_logger = get_logger("shiptivity.api")
db_logger = get_logger("shiptivity.db")
core_logger = get_logger("shiptivity.core")
