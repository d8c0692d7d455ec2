"""Structured logging configuration for gitshell.

This module provides structlog-based logging with:
- JSON output for production (when env var GITSHELL_LOG_FORMAT=json)
- Pretty console output for development (default)
- Automatic context binding (repository path, git operation)

The library never configures logging on import; applications call
``configure_logging()`` once at startup if they want gitshell's format.

Usage:
    from gitshell.logging import bound_context, configure_logging, get_logger

    configure_logging()

    log = get_logger(__name__)
    with bound_context(repo="/srv/project", operation="status"):
        log.debug("git_command_started", args=["status"])
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import Processor

__all__ = [
    "get_logger",
    "configure_logging",
    "bound_context",
]

# Environment variable for log format
LOG_FORMAT_ENV_VAR = "GITSHELL_LOG_FORMAT"

# Environment variable for log level
LOG_LEVEL_ENV_VAR = "GITSHELL_LOG_LEVEL"

# Default log level
DEFAULT_LOG_LEVEL = "INFO"


def _resolve_level(level: int | str | None) -> int:
    """Turn a level constant or name into a logging level.

    Args:
        level: ``logging.DEBUG``, a name such as ``"debug"`` (the values of
            ``GitShellConfig.verbosity``), or None to read GITSHELL_LOG_LEVEL.

    Returns:
        Logging level constant. Unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    name = level if level is not None else os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)
    resolved = logging.getLevelName(name.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _is_json_output() -> bool:
    """Check if JSON output is enabled.

    Returns:
        True if GITSHELL_LOG_FORMAT=json, False otherwise.
    """
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _get_shared_processors() -> list[Processor]:
    """Processors applied to both structlog events and stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _get_render_processors(use_json: bool) -> list[Processor]:
    if use_json:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(
    *,
    force_json: bool = False,
    level: int | str | None = None,
) -> None:
    """Configure structlog for the application.

    structlog events and records from plain stdlib loggers are rendered by
    one stderr handler. Subsequent calls reconfigure logging.

    Args:
        force_json: Force JSON output regardless of environment variable.
        level: Level constant or name. If None, reads from GITSHELL_LOG_LEVEL.

    Example:
        configure_logging()
        configure_logging(force_json=True)
        configure_logging(level=load_config().verbosity)
    """
    use_json = force_json or _is_json_output()
    log_level = _resolve_level(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_get_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_get_render_processors(use_json),
            ],
            foreign_pre_chain=_get_shared_processors(),
        )
    )

    root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name. If None, uses the caller's module name.

    Returns:
        A bound structlog logger.

    Example:
        log = get_logger(__name__)
        log.info("repository_opened", path="/srv/project", bare=False)
    """
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log


@contextmanager
def bound_context(**context: Any) -> Iterator[None]:
    """Attach context to every log event emitted inside the block.

    Values bound by an outer block are restored on exit, so nested git
    commands do not clobber the caller's context.

    Args:
        **context: Key-value pairs to bind to log context.

    Example:
        with bound_context(repo="/srv/project", operation="fetch"):
            log.debug("git_command_started")  # Includes repo and operation
    """
    with structlog.contextvars.bound_contextvars(**context):
        yield
