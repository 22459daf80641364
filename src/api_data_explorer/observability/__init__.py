"""Observability helpers: structured logging for the fetch lifecycle."""

from .logging import bind_fetch_context, clear_fetch_context, get_fetch_logger, setup_structured_logging

__all__ = [
    "bind_fetch_context",
    "clear_fetch_context",
    "get_fetch_logger",
    "setup_structured_logging",
]
