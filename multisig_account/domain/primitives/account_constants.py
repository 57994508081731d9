"""Protocol constants for the multisig account.

These are invariants of the account, not operational tunables, and are
not read from the environment. Operational settings live in
``multisig_account.config``.
"""

from __future__ import annotations

from typing import Final

from multisig_account.domain.models.version import Version

# Registry bounds
MAX_SIGNERS: Final[int] = 32
SIGNER_ID_BITS: Final[int] = 256

# Zero is the "absent" sentinel for signers and addresses.
NULL_SIGNER: Final[int] = 0
PROTOCOL_CALLER: Final[int] = 0

# Transaction versions. Fee-estimation ("query") variants are offset by 2**128.
SUPPORTED_TX_VERSIONS: Final[frozenset[int]] = frozenset({1, 2, 3})
QUERY_VERSION_OFFSET: Final[int] = 2**128

# Capability introspection ids
INTROSPECTION_INTERFACE_ID: Final[int] = (
    0x3F918D17E5EE77373B56385708F855659A07F75997F365CF87748628532A055
)
ACCOUNT_INTERFACE_ID: Final[int] = (
    0x2CECCEF7F994940B3962A6C67E0BA4FCD37DF7D131417C604F91E03CAECC1CD
)
LEGACY_ACCOUNT_INTERFACE_ID: Final[int] = 0xA66BD575

SUPPORTED_INTERFACE_IDS: Final[frozenset[int]] = frozenset(
    {INTROSPECTION_INTERFACE_ID, ACCOUNT_INTERFACE_ID, LEGACY_ACCOUNT_INTERFACE_ID}
)

# Returned by validate entry points and by is_valid_signature on success ('VALID').
VALIDATED: Final[int] = 0x56414C4944

# Reserved selector: only reachable as a consequence of an upgrade.
EXECUTE_AFTER_UPGRADE_SELECTOR: Final[str] = "execute_after_upgrade"

ACCOUNT_VERSION: Final[Version] = Version(0, 1, 0)
DEFAULT_ACCOUNT_NAME: Final[str] = "ThresholdMultisig"


def is_supported_tx_version(version: int, allow_query: bool = True) -> bool:
    """Check a declared transaction version against the supported set.

    Args:
        version: Version declared by the request.
        allow_query: Whether fee-estimation variants are accepted.

    Returns:
        True if the version may be executed.
    """
    if version in SUPPORTED_TX_VERSIONS:
        return True
    return allow_query and (version - QUERY_VERSION_OFFSET) in SUPPORTED_TX_VERSIONS


def is_valid_signer_id(value: object) -> bool:
    """A signer id is a non-zero integer that fits in SIGNER_ID_BITS."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and NULL_SIGNER < value < 2**SIGNER_ID_BITS
    )
