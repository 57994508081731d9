"""Signature verifier stub implementation.

This module provides a stub implementation of SignatureVerifierProtocol
for development and testing purposes.

The stub accepts every signature by default. Individual signers can be
marked as rejected to exercise invalid-signature paths without real
key material. For actual ECDSA verification, use
``Secp256k1SignatureVerifier``.
"""

from __future__ import annotations

from dataclasses import dataclass

from multisig_account.application.ports.signature_verifier import (
    SignatureVerifierProtocol,
)


@dataclass(frozen=True)
class VerificationRecord:
    """One verify() call, recorded for test assertions."""

    message_hash: int
    public_key: int
    r: int
    s: int
    result: bool


class SignatureVerifierStub(SignatureVerifierProtocol):
    """Stub implementation of SignatureVerifierProtocol.

    Behavior:
    - accept_all=True: accept every signature except those from
      ``rejected_signers``
    - accept_all=False: reject every signature

    Attributes:
        verifications: Every verify() call in order.
    """

    def __init__(
        self,
        accept_all: bool = True,
        rejected_signers: set[int] | None = None,
    ) -> None:
        """Initialize the stub.

        Args:
            accept_all: If False, all signatures are rejected.
            rejected_signers: Signers whose signatures always fail.
        """
        self._accept_all = accept_all
        self._rejected_signers: set[int] = set(rejected_signers or ())
        self.verifications: list[VerificationRecord] = []

    async def verify(self, message_hash: int, public_key: int, r: int, s: int) -> bool:
        result = self._accept_all and public_key not in self._rejected_signers
        self.verifications.append(
            VerificationRecord(
                message_hash=message_hash,
                public_key=public_key,
                r=r,
                s=s,
                result=result,
            )
        )
        return result

    def get_algorithm(self) -> str:
        return "stub"

    def set_accept_all(self, accept_all: bool) -> None:
        self._accept_all = accept_all

    def reject_signer(self, signer: int) -> None:
        """Make every future signature by ``signer`` fail."""
        self._rejected_signers.add(signer)

    def clear(self) -> None:
        """Reset recorded calls and rejections."""
        self.verifications.clear()
        self._rejected_signers.clear()
        self._accept_all = True
