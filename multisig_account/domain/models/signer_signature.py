"""Signer signature model and wire parsing.

An aggregate signature is an ordered list of (signer, r, s) triples. On
the wire it is flattened to ``[signer_0, r_0, s_0, signer_1, r_1, s_1, ...]``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from multisig_account.domain.errors.authentication import InvalidSignatureLengthError

SIGNATURE_WIDTH = 3


@dataclass(frozen=True)
class SignerSignature:
    """One signer's ECDSA signature over a message hash.

    Attributes:
        signer: Signer id (public key material).
        r: Signature component r.
        s: Signature component s.
    """

    signer: int
    r: int
    s: int

    def to_calldata(self) -> list[int]:
        return [self.signer, self.r, self.s]


def parse_signature_list(flat: Sequence[int]) -> list[SignerSignature]:
    """Split a flat signature array into signer signatures.

    Args:
        flat: ``[signer, r, s, ...]``.

    Returns:
        Signer signatures in the order presented.

    Raises:
        InvalidSignatureLengthError: If the length is not a multiple of 3.
    """
    if len(flat) % SIGNATURE_WIDTH:
        expected = (len(flat) // SIGNATURE_WIDTH + 1) * SIGNATURE_WIDTH
        raise InvalidSignatureLengthError(expected=expected, actual=len(flat))
    return [
        SignerSignature(signer=flat[i], r=flat[i + 1], s=flat[i + 2])
        for i in range(0, len(flat), SIGNATURE_WIDTH)
    ]


def flatten_signatures(signatures: Iterable[SignerSignature]) -> list[int]:
    flat: list[int] = []
    for signature in signatures:
        flat.extend(signature.to_calldata())
    return flat


def sort_signatures(signatures: Iterable[SignerSignature]) -> list[SignerSignature]:
    """Order signatures canonically (strictly ascending signer id).

    Used by clients assembling an aggregate signature. Duplicates are not
    removed; the verifier rejects them.
    """
    return sorted(signatures, key=lambda signature: signature.signer)
