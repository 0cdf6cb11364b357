"""Structured logging for AgentDesk.

Lifecycle, matching and context events are logged through structlog as
snake_case event names with key/value fields. Output is one JSON object per
line unless ``debug`` is set, in which case a console renderer is used.
Lines emitted while a conversation is active carry its ``session_id``.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any

import structlog

from agentdesk.config import Settings, get_settings


def _enum_values(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Render enum fields such as artifact statuses by their value."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger from settings.

    ``debug`` switches to the console renderer and forces DEBUG level, so
    stale transitions and recommendation passes become visible.
    """
    settings = settings or get_settings()
    level = "DEBUG" if settings.debug else settings.log_level

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
    )

    processors: list[Any] = [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _enum_values,
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.debug:
        processors.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)
        )
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def session_context(session_id: str, **fields: Any) -> Iterator[None]:
    """Tag every log line emitted inside the block with a conversation.

    Context left over from an earlier conversation is dropped first.
    """
    structlog.contextvars.clear_contextvars()
    with structlog.contextvars.bound_contextvars(session_id=session_id, **fields):
        yield
