"""Authentication failure errors for aggregate signatures.

These reject a request at the validate gate; a request that fails
authentication never reaches execution.
"""

from __future__ import annotations

from multisig_account.domain.exceptions import AccountError


class AuthenticationFailureError(AccountError):
    """Base class for aggregate signature failures."""

    code = "multisig/authentication-failure"


class InvalidSignatureLengthError(AuthenticationFailureError):
    """Raised when the number of signatures does not match what is required.

    Attributes:
        expected: Number of signatures required.
        actual: Number of signatures presented.
    """

    code = "multisig/invalid-signature-length"

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"{self.code}: expected {expected}, got {actual}")


class SignersNotSortedError(AuthenticationFailureError):
    """Raised when signers are not in strictly ascending order.

    Covers repeated signers too, since a repeat is never strictly greater
    than its predecessor.

    Attributes:
        signer: The out-of-order signer.
        previous: The signer that preceded it.
    """

    code = "multisig/signatures-not-sorted"

    def __init__(self, signer: int, previous: int) -> None:
        self.signer = signer
        self.previous = previous
        super().__init__(f"{self.code}: {signer:#x} follows {previous:#x}")


class NotASignerError(AuthenticationFailureError):
    """Raised when a signature comes from an id that is not registered."""

    code = "multisig/not-a-signer"

    def __init__(self, signer: int) -> None:
        self.signer = signer
        super().__init__(f"{self.code}: {signer:#x}")


class InvalidSignatureError(AuthenticationFailureError):
    """Raised when the signature primitive rejects a signer's signature."""

    code = "multisig/invalid-signature"

    def __init__(self, signer: int) -> None:
        self.signer = signer
        super().__init__(f"{self.code}: signature from {signer:#x} does not verify")
