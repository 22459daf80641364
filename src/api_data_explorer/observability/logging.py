"""Structured logging with per-fetch context using structlog and contextvars."""

import logging

import structlog

_configured = False


def setup_structured_logging(level: str = "INFO") -> None:
    """Configure structlog with JSON output and per-fetch context.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    global _configured
    if _configured:
        return

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,  # Inject fetch context
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
    )

    # httpx logs every request at INFO
    for logger_name in ("httpx", "httpcore"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    _configured = True


def bind_fetch_context(seq: int, source: str) -> None:
    """Bind fetch context for all subsequent logs in this async context.

    Args:
        seq: Sequence number of the fetch
        source: Source being fetched
    """
    structlog.contextvars.bind_contextvars(fetch_seq=seq, source=source)


def clear_fetch_context() -> None:
    """Clear fetch context after the fetch resolves."""
    structlog.contextvars.clear_contextvars()


def get_fetch_logger(name: str = "api_data_explorer") -> structlog.stdlib.BoundLogger:
    """Get a structlog logger carrying the fetch context."""
    return structlog.get_logger(name)
