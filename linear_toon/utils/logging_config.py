"""
Logging configuration using structlog for structured, JSON-based logging.

Logs are written to stderr: stdout carries the MCP stdio protocol and must
stay clean.
"""

import sys
from typing import Any, TextIO

import structlog

REDACTED = "***"

# Event keys whose values are replaced before rendering.
SECRET_KEYS = frozenset({"api_key", "authorization", "token"})


def redact_secrets(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Processor masking credential-looking keys."""
    for key in event_dict:
        if key.lower() in SECRET_KEYS:
            event_dict[key] = REDACTED
    return event_dict


def configure_logging(log_level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure structured logging with JSON output.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Destination, stderr when omitted

    Example:
        >>> configure_logging("DEBUG")
        >>> structlog.get_logger(__name__).info("reference_resolved", kind="team")
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_secrets,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level.upper()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=True,
    )
