"""Errors raised by the call-dispatch primitive."""

from __future__ import annotations

from multisig_account.domain.exceptions import AccountError


class CallDispatchError(AccountError):
    """Raised when a dispatched call fails downstream.

    The failure propagates unchanged and fails the whole request.

    Attributes:
        target: Address the call was sent to.
        selector: Entry point that failed.
    """

    code = "multisig/call-failed"

    def __init__(self, target: int, selector: str, reason: str = "") -> None:
        self.target = target
        self.selector = selector
        self.reason = reason
        super().__init__(
            f"{self.code}: {selector} on {target:#x}" + (f" ({reason})" if reason else "")
        )
