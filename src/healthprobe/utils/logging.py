"""Structured logging configuration using structlog."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Driver loggers that are noisy below WARNING
QUIET_LOGGERS = ("pymongo", "motor")


def drop_empty_fields(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Remove context keys bound to None, e.g. a missing client address."""
    return {key: value for key, value in event_dict.items() if value is not None}


def setup_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure structlog and route standard library loggers to stdout.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_logs: Render one JSON object per line instead of console output
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", level=level, stream=sys.stdout, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        drop_empty_fields,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if json_logs:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, bound with ``initial_context`` if given."""
    return structlog.get_logger(name, **initial_context)


class LoggerMixin:
    """Gives a class a logger bound to its component name and context."""

    log_component: str = ""

    def _log_context(self) -> dict[str, Any]:
        """Extra fields bound to every line this instance logs."""
        return {}

    @property
    def log(self) -> structlog.stdlib.BoundLogger:
        component = self.log_component or type(self).__name__
        return get_logger(component, component=component, **self._log_context())


@contextmanager
def request_context(request_id: str, **fields: Any) -> Iterator[None]:
    """Bind a request id and request details to every log line in the block."""
    structlog.contextvars.clear_contextvars()
    with structlog.contextvars.bound_contextvars(request_id=request_id, **fields):
        yield
