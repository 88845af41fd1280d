"""
Structured logging for Rebirth.

Everything is logged through structlog as snake_case events with keyword
context. The CLI calls configure_logging() once; library code only ever asks
for a logger with get_logger(__name__).
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, TextIO

import structlog

from rebirth.shared.infrastructure.config import Settings, settings as default_settings


def log_level(settings: Settings) -> int:
    """Numeric level for the configured name, WARNING if it is unknown."""
    level = logging.getLevelName(settings.log_level.upper())
    return level if isinstance(level, int) else logging.WARNING


def _renderer(settings: Settings) -> list[Any]:
    if settings.is_development:
        return [structlog.dev.ConsoleRenderer(colors=False)]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def configure_logging(stream: TextIO = sys.stderr, settings: Settings | None = None) -> None:
    """
    Route structlog through the standard library to ``stream``.

    Console rendering in development, one JSON object per line otherwise.
    """
    settings = settings or default_settings

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            *_renderer(settings),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=stream, level=log_level(settings), force=True)


@contextmanager
def repair_run(action: str, workspace: str) -> Iterator[None]:
    """Attach action and workspace to every event logged inside the block."""
    with structlog.contextvars.bound_contextvars(run_action=action, run_workspace=workspace):
        yield


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("orphan_pruned", identifier="a1b2", path="/sites/demo/x")
    """
    return structlog.get_logger(name)
