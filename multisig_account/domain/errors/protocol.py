"""Protocol violation errors.

Structural rejections that are independent of signature validity:
unsupported transaction versions, forbidden call shapes, reentrancy and
calls that did not come from the protocol.
"""

from __future__ import annotations

from multisig_account.domain.exceptions import AccountError


class ProtocolViolationError(AccountError):
    """Base class for structural request rejections."""

    code = "multisig/protocol-violation"


class UnsupportedVersionError(ProtocolViolationError):
    """Raised when the request declares a transaction version the account
    does not accept."""

    code = "multisig/invalid-tx-version"

    def __init__(self, version: int) -> None:
        self.version = version
        super().__init__(f"{self.code}: {version:#x}")


class ForbiddenCallError(ProtocolViolationError):
    """Raised when a user request calls the reserved migration selector."""

    code = "multisig/forbidden-call"

    def __init__(self, selector: str) -> None:
        self.selector = selector
        super().__init__(f"{self.code}: {selector} cannot be called directly")


class ForbiddenSelfCallError(ProtocolViolationError):
    """Raised when a multi-call batch contains a call to the account itself."""

    code = "multisig/no-multicall-to-self"

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"{self.code}: call {index} targets the account")


class ReentrantCallError(ProtocolViolationError):
    """Raised when execution re-enters while an execution is in flight."""

    code = "multisig/reentrant-call"


class NonNullCallerError(ProtocolViolationError):
    """Raised when validate/execute is invoked by anything but the protocol."""

    code = "multisig/non-null-caller"

    def __init__(self, caller: int) -> None:
        self.caller = caller
        super().__init__(f"{self.code}: {caller:#x}")


class UnknownEntrypointError(ProtocolViolationError):
    """Raised when a call targets a selector the account does not expose."""

    code = "multisig/unknown-entrypoint"

    def __init__(self, selector: str) -> None:
        self.selector = selector
        super().__init__(f"{self.code}: {selector}")


class MalformedCalldataError(ProtocolViolationError):
    """Raised when flat calldata cannot be decoded for an entry point."""

    code = "multisig/malformed-calldata"
