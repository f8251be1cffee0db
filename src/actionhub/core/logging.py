# Copyright 2025 Google LLC
# SPDX-License-Identifier: Apache-2.0

"""Typed logging utilities for action hub actions.

This module provides a typed wrapper around structlog. The `Logger` protocol
defines the interface used throughout the package, and `get_logger()` returns
a properly typed logger instance. `configure_logging()` is for hosts that
want structlog and stdlib records rendered the same way.

Usage:
    from actionhub.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info('dataset import started', dataset='projects/p/...')
"""

import logging
import sys
from typing import Protocol

import structlog


class Logger(Protocol):
    """Protocol defining the logger interface used by the actions.

    This protocol matches structlog's BoundLogger interface.
    """

    def debug(self, event: str | None = None, **kw: object) -> None:
        """Log a debug message."""
        ...

    def info(self, event: str | None = None, **kw: object) -> None:
        """Log an info message."""
        ...

    def warning(self, event: str | None = None, **kw: object) -> None:
        """Log a warning message."""
        ...

    def error(self, event: str | None = None, **kw: object) -> None:
        """Log an error message."""
        ...

    def exception(self, event: str | None = None, **kw: object) -> None:
        """Log an exception with traceback."""
        ...

    def bind(self, **new_values: object) -> 'Logger':
        """Return a new logger with bound context values."""
        ...


def get_logger(name: str | None = None) -> Logger:
    """Get a typed logger instance.

    Args:
        name: Optional logger name (typically __name__).

    Returns:
        A typed logger instance.
    """
    return structlog.get_logger(name)


def configure_logging(level: int = logging.INFO, json: bool = False) -> None:
    """Route structlog and stdlib logging through one formatter.

    Args:
        level: Minimum log level to emit.
        json: Render JSON lines instead of the console format.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt='iso'),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    render_chain: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if json:
        render_chain += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        render_chain.append(structlog.dev.ConsoleRenderer(colors=False))

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=render_chain,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
