"""
Structured logging for the blogs-cache library.

The library only emits events through structlog; :func:`configure_logging`
is for applications that want the JSON output. Context bound with
``structlog.contextvars`` (by the cache service, or by the caller, e.g. a
request id) is merged into every event.
"""

import sys
import logging
from typing import Any, Dict

import structlog


def configure_logging(service_name: str, log_level: str = "info") -> None:
    """Configure structlog to render JSON lines through stdlib logging."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_service_context,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    structlog.get_logger(service_name).debug("Logging configured", log_level=log_level)


def add_service_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Name the emitting package, taken from the first part of the logger name."""
    logger_name = event_dict.get("logger", "")
    if "." in logger_name:
        event_dict["service"] = logger_name.split(".")[0]

    return event_dict


def cache_context(operation: str, key: str):
    """Bind the cache operation and key to every event logged inside the block."""
    return structlog.contextvars.bound_contextvars(operation=operation, key=key)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
