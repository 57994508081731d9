"""Configuration module for the multisig account.

Available Configurations:
- AccountConfig: Name, log output mode, fee-estimation version handling
"""

from multisig_account.config.account_config import (
    DEFAULT_ACCOUNT_CONFIG,
    TEST_ACCOUNT_CONFIG,
    AccountConfig,
)

__all__ = [
    "AccountConfig",
    "DEFAULT_ACCOUNT_CONFIG",
    "TEST_ACCOUNT_CONFIG",
]
