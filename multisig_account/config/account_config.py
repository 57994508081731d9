"""Account runtime configuration.

Operational settings with environment variable overrides. Protocol
invariants (MAX_SIGNERS, interface ids, supported transaction versions)
are constants in ``multisig_account.domain.primitives`` and are not
configurable.

Environment Variables:
- MULTISIG_ACCOUNT_NAME: Name returned by get_name() (default: ThresholdMultisig)
- MULTISIG_LOG_ENVIRONMENT: production (JSON logs) or development (console)
  (default: production)
- MULTISIG_ALLOW_QUERY_VERSIONS: Accept fee-estimation variants of the
  supported transaction versions (default: true)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from multisig_account.domain.primitives.account_constants import DEFAULT_ACCOUNT_NAME

_LOG_ENVIRONMENTS = frozenset({"production", "development"})
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})

# Names are returned as a single 31-byte short string.
MAX_NAME_BYTES = 31


def _get_str_env(key: str, default: str) -> str:
    """Get string environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or blank.

    Returns:
        Stripped value or default.
    """
    value = os.environ.get(key)
    if value is None or not value.strip():
        return default
    return value.strip()


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable with default.

    Unrecognized values fall back to the default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


@dataclass(frozen=True)
class AccountConfig:
    """Configuration for one account deployment.

    Attributes:
        name: Name reported by get_name(); ASCII, at most 31 bytes.
        log_environment: "production" for JSON logs, "development" for console.
        allow_query_versions: Whether fee-estimation transaction versions
            (version + 2**128) are executable.
    """

    name: str = DEFAULT_ACCOUNT_NAME
    log_environment: str = "production"
    allow_query_versions: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.name:
            raise ValueError("name must not be empty")
        if not self.name.isascii():
            raise ValueError(f"name must be ASCII, got {self.name!r}")
        if len(self.name.encode("ascii")) > MAX_NAME_BYTES:
            raise ValueError(
                f"name must be at most {MAX_NAME_BYTES} bytes, got {len(self.name)}"
            )
        if self.log_environment not in _LOG_ENVIRONMENTS:
            raise ValueError(
                f"log_environment must be one of {sorted(_LOG_ENVIRONMENTS)}, "
                f"got {self.log_environment!r}"
            )

    @classmethod
    def from_environment(cls) -> "AccountConfig":
        """Create config from environment variables with defaults.

        Returns:
            AccountConfig with values from environment or defaults.
        """
        return cls(
            name=_get_str_env("MULTISIG_ACCOUNT_NAME", DEFAULT_ACCOUNT_NAME),
            log_environment=_get_str_env("MULTISIG_LOG_ENVIRONMENT", "production"),
            allow_query_versions=_get_bool_env("MULTISIG_ALLOW_QUERY_VERSIONS", True),
        )

    @property
    def encoded_name(self) -> int:
        """Name as a big-endian short-string felt."""
        return int.from_bytes(self.name.encode("ascii"), "big")


# Default production config
DEFAULT_ACCOUNT_CONFIG = AccountConfig()

# Testing config: console logs, query versions rejected so tests pin exact versions
TEST_ACCOUNT_CONFIG = AccountConfig(
    name="TestMultisig",
    log_environment="development",
    allow_query_versions=False,
)
