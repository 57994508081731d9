"""Upgrade failure errors.

An upgrade failure rejects the upgrade atomically: the previous code
remains active and no migration state is kept.
"""

from __future__ import annotations

from multisig_account.domain.exceptions import AccountError


class UpgradeFailureError(AccountError):
    """Base class for upgrade protocol failures."""

    code = "multisig/upgrade-failure"


class InvalidImplementationError(UpgradeFailureError):
    """Raised when the target code does not expose the account interface."""

    code = "multisig/invalid-implementation"

    def __init__(self, code_id: int) -> None:
        self.code_id = code_id
        super().__init__(f"{self.code}: {code_id:#x}")


class UnexpectedDataError(UpgradeFailureError):
    """Raised when the post-upgrade entry point receives non-empty data."""

    code = "multisig/unexpected-data"


class InvalidCodeError(UpgradeFailureError):
    """Raised by the code-replacement primitive for an unknown code id."""

    code = "multisig/invalid-code"

    def __init__(self, code_id: int) -> None:
        self.code_id = code_id
        super().__init__(f"{self.code}: {code_id:#x}")
