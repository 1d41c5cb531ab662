"""Structured logging for PokeVault.

Everything goes through structlog. Standard library loggers (aiogram,
SQLAlchemy, httpx) are routed to the same stream so refresh runs and bot
updates read as one log.
"""

import logging
import sys
from typing import Any

import structlog

from pokevault.config import settings

# Third-party loggers and the level they are capped at
QUIET_LOGGERS = {
    "asyncio": logging.WARNING,
    "aiogram.event": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
}


def _renderer() -> Any:
    if settings.log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging() -> None:
    """Configure structlog and the standard library root logger."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]
    if settings.log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
    processors.append(_renderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", stream=sys.stdout, level=log_level)

    # SQL echo stays visible in debug mode
    for name, level in QUIET_LOGGERS.items():
        if settings.debug and name == "sqlalchemy.engine":
            continue
        logging.getLogger(name).setLevel(max(level, log_level))


def bind_update_context(**values: Any) -> None:
    """Attach values (user id, update kind) to every log line of this task."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**{k: v for k, v in values.items() if v is not None})


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
