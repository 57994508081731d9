"""Domain primitives: protocol constants and shared invariants."""

from multisig_account.domain.primitives.account_constants import (
    ACCOUNT_INTERFACE_ID,
    ACCOUNT_VERSION,
    EXECUTE_AFTER_UPGRADE_SELECTOR,
    INTROSPECTION_INTERFACE_ID,
    LEGACY_ACCOUNT_INTERFACE_ID,
    MAX_SIGNERS,
    PROTOCOL_CALLER,
    QUERY_VERSION_OFFSET,
    SUPPORTED_INTERFACE_IDS,
    SUPPORTED_TX_VERSIONS,
    VALIDATED,
    is_supported_tx_version,
    is_valid_signer_id,
)
from multisig_account.domain.primitives.threshold_policy import (
    assert_valid_threshold_and_signers_count,
)

__all__ = [
    "ACCOUNT_INTERFACE_ID",
    "ACCOUNT_VERSION",
    "EXECUTE_AFTER_UPGRADE_SELECTOR",
    "INTROSPECTION_INTERFACE_ID",
    "LEGACY_ACCOUNT_INTERFACE_ID",
    "MAX_SIGNERS",
    "PROTOCOL_CALLER",
    "QUERY_VERSION_OFFSET",
    "SUPPORTED_INTERFACE_IDS",
    "SUPPORTED_TX_VERSIONS",
    "VALIDATED",
    "assert_valid_threshold_and_signers_count",
    "is_supported_tx_version",
    "is_valid_signer_id",
]
