"""Observability infrastructure: structured logging.

Request correlation uses structlog's contextvars: the execution pipeline
binds ``correlation_id`` (the hex transaction hash) with
``structlog.contextvars.bound_contextvars`` and ``merge_contextvars``
adds it to every entry.

Usage:
    from multisig_account.infrastructure.observability import configure_structlog

    # At startup
    configure_structlog(environment="production")
"""

from multisig_account.infrastructure.observability.logging import (
    configure_structlog,
    get_logger_for_service,
)

__all__: list[str] = [
    "configure_structlog",
    "get_logger_for_service",
]
