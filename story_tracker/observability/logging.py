"""Structured logging configuration using structlog.

Provides JSON logging for production and console logging for development.
Model output can be arbitrarily long, so string values in log events are
cut down to a preview length before rendering.
"""

import sys
from collections.abc import MutableMapping
from typing import Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

DEFAULT_PREVIEW_LENGTH = 200

# Keys that are never truncated
PRESERVED_KEYS: frozenset[str] = frozenset({
    "event",
    "level",
    "timestamp",
    "logger",
})


class PreviewTruncator:
    """Processor that shortens long string values in log events.

    Nested dicts and lists are walked recursively. Truncated values keep
    their head and report the original length.
    """

    def __init__(self, max_length: int = DEFAULT_PREVIEW_LENGTH) -> None:
        self.max_length = max_length

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """Truncate long values in the event dictionary."""
        return cast(EventDict, self._truncate_dict(event_dict, top_level=True))

    def _truncate_dict(
        self, data: MutableMapping[str, Any], top_level: bool = False
    ) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in data.items():
            if top_level and key in PRESERVED_KEYS:
                result[key] = value
            else:
                result[key] = self._truncate_value(value)
        return result

    def _truncate_value(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._truncate_string(value)
        if isinstance(value, dict):
            return self._truncate_dict(value)
        if isinstance(value, list):
            return [self._truncate_value(item) for item in value]
        return value

    def _truncate_string(self, value: str) -> str:
        if len(value) <= self.max_length:
            return value
        return f"{value[:self.max_length]}...[{len(value)} chars]"


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format - "json" for production, "console" for development
        preview_length: Maximum length of string values in log events
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        PreviewTruncator(max_length=preview_length),
    ]

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    level_map = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    level_num = level_map.get(level.upper(), 20)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        A bound structlog logger
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
