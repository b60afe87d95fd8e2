"""Observability module for structured logging."""

from src.observability.logging import (
    bind_caller_context,
    clear_caller_context,
    configure_logging,
    get_logger,
)


__all__ = [
    "bind_caller_context",
    "clear_caller_context",
    "configure_logging",
    "get_logger",
]
