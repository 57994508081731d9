"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from multisig_account.config.account_config import AccountConfig
from multisig_account.infrastructure.observability import (
    configure_structlog as _configure_structlog,
)


def configure_structlog(environment: str) -> None:
    """Configure structlog for the given environment."""
    _configure_structlog(environment=environment)


def configure_logging_from_config(config: AccountConfig) -> None:
    """Configure structlog from an account config's log environment."""
    _configure_structlog(environment=config.log_environment)


__all__ = ["configure_logging_from_config", "configure_structlog"]
