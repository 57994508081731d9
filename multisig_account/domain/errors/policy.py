"""Policy violation errors for the multisig account.

Policy violations are caller errors: the request asked for a registry or
threshold configuration the account refuses to hold. They always reject
the whole request and are never partially applied.

Invariants protected:
- 1 <= threshold <= signer count
- 1 <= signer count <= MAX_SIGNERS
- No duplicate signers, zero is never a signer
- Governance operations are self-authorized only
"""

from __future__ import annotations

from multisig_account.domain.exceptions import AccountError


class PolicyViolationError(AccountError):
    """Base class for registry and threshold policy violations."""

    code = "multisig/policy-violation"


class OnlySelfAllowedError(PolicyViolationError):
    """Raised when a governance or upgrade entry point is called by anyone
    other than the account itself.

    Attributes:
        caller: Address of the rejected caller.
        account: Address of the account that was targeted.
    """

    code = "multisig/only-self"

    def __init__(self, caller: int, account: int) -> None:
        self.caller = caller
        self.account = account
        super().__init__(
            f"{self.code}: caller {caller:#x} is not the account {account:#x}"
        )


class InvalidThresholdError(PolicyViolationError):
    """Raised when a threshold is zero or exceeds the signer count.

    Attributes:
        threshold: The rejected threshold.
        signers_count: The signer count it was checked against.
    """

    code = "multisig/invalid-threshold"

    def __init__(self, threshold: int, signers_count: int) -> None:
        self.threshold = threshold
        self.signers_count = signers_count
        super().__init__(
            f"{self.code}: threshold {threshold} is not within "
            f"[1, {signers_count}]"
        )


class InvalidSignerCountError(PolicyViolationError):
    """Raised when the signer count would leave [1, MAX_SIGNERS].

    Attributes:
        signers_count: The count the operation would have produced.
    """

    code = "multisig/invalid-signers-len"

    def __init__(self, signers_count: int, message: str | None = None) -> None:
        self.signers_count = signers_count
        super().__init__(
            message or f"{self.code}: signer count {signers_count} is out of range"
        )


class CapacityExceededError(InvalidSignerCountError):
    """Raised when adding signers would exceed MAX_SIGNERS."""

    code = "multisig/too-many-signers"

    def __init__(self, signers_count: int, max_signers: int) -> None:
        self.max_signers = max_signers
        super().__init__(
            signers_count,
            f"{self.code}: {signers_count} signers exceeds the maximum of {max_signers}",
        )


class LastSignerInvariantError(InvalidSignerCountError):
    """Raised when a removal would leave the registry without any signer."""

    code = "multisig/cannot-remove-last-signer"

    def __init__(self) -> None:
        super().__init__(0, f"{self.code}: the registry must keep at least one signer")


class DuplicateSignerError(PolicyViolationError):
    """Raised when a signer is already registered (or repeated in a batch).

    Attributes:
        signer: The duplicated signer id.
    """

    code = "multisig/already-a-signer"

    def __init__(self, signer: int) -> None:
        self.signer = signer
        super().__init__(f"{self.code}: {signer:#x}")


class UnknownSignerError(PolicyViolationError):
    """Raised when a signer to remove or replace is not registered.

    Attributes:
        signer: The unknown signer id.
    """

    code = "multisig/not-a-signer"

    def __init__(self, signer: int) -> None:
        self.signer = signer
        super().__init__(f"{self.code}: {signer:#x}")


class InvalidSignerError(PolicyViolationError):
    """Raised for the reserved zero id or a value outside the 256-bit range."""

    code = "multisig/invalid-signer"

    def __init__(self, signer: int) -> None:
        self.signer = signer
        super().__init__(f"{self.code}: {signer!r} is not a valid signer id")
