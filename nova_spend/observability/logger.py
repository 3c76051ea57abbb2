"""
Structured Logging

DESIGN DECISION: Every state change in the data layer is logged as a
structured event (event name + key/value context), never as prose.
This provides:
1. Debugging capability when a record comes back damaged
2. A trail of what was written, without keeping an audit store
3. Machine-readable output when json_logs is enabled

Logging never raises into the caller and is never shown to the user.
"""

import logging
import sys

import structlog


def _processors(json_logs: bool) -> list:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


# Configure structlog for local logging
structlog.configure(
    processors=_processors(json_logs=True),
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=False,
)


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    (Re)configure logging for the whole package.

    Args:
        level: Minimum level for the nova_spend logger hierarchy
        json_logs: Render JSON lines; False renders human-readable lines
    """
    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger("nova_spend").setLevel(level.upper())

    structlog.configure(
        processors=_processors(json_logs=json_logs),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, usually with __name__ of the calling module."""
    return structlog.get_logger(name)
