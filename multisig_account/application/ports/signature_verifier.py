"""Signature verifier port.

The low-level signature primitive is a trusted oracle to the account:
``verify(hash, public_key, r, s) -> bool``. Implementations are assumed
constant-time and side-channel safe; that is outside this codebase.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SignatureVerifierProtocol(ABC):
    """Abstract protocol for single-signature verification.

    Implementations:
    - Secp256k1SignatureVerifier: ECDSA over secp256k1 (cryptography)
    - SignatureVerifierStub: configurable accept/reject for tests
    """

    @abstractmethod
    async def verify(self, message_hash: int, public_key: int, r: int, s: int) -> bool:
        """Verify one signature over a message hash.

        Args:
            message_hash: The hash that was signed.
            public_key: Signer id (public key material).
            r: Signature component r.
            s: Signature component s.

        Returns:
            True if the signature is valid for this key, False otherwise.
            Malformed inputs MUST return False rather than raise.
        """
        ...

    @abstractmethod
    def get_algorithm(self) -> str:
        """Return the signature algorithm name."""
        ...
