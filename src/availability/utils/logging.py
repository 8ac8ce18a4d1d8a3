"""Logging configuration for the availability domain.

Stock warnings (over-reservation clamps) and inventory edits are logged through
structlog on top of the standard library root logger. PROTEAN_ENV picks both
the level and the renderer, so the log output follows the same overlay as
``domain.toml``.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVEL_BY_ENV = {
    "production": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


def current_environment() -> str:
    return os.getenv("PROTEAN_ENV", "development").lower()


def _stock_log_handlers(level: str) -> list[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    handlers = [console]

    # LOG_DIR unset means console only, which is what tests and local runs want
    log_dir = os.getenv("LOG_DIR")
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        rotating = logging.handlers.RotatingFileHandler(
            filename=Path(log_dir) / "availability.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        rotating.setLevel(level)
        handlers.append(rotating)
    return handlers


def configure_logging() -> None:
    """Route stdlib logging to the console (and LOG_DIR) and render with structlog."""
    env = current_environment()
    level = os.getenv("LOG_LEVEL", _LEVEL_BY_ENV.get(env, "INFO"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = _stock_log_handlers(level)

    for chatty in ("protean", "uvicorn.access"):
        logging.getLogger(chatty).setLevel(logging.WARNING)

    if env == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def add_context(**kwargs: Any) -> None:
    """Bind values (e.g. request id) onto every log line of the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
