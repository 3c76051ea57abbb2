"""Structured logging package."""

from nova_spend.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
