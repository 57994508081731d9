"""ECDSA over secp256k1 signature adapter.

Signer ids are the x-coordinate of the signer's public key. The point
is recovered with the even-y convention (SEC1 compressed prefix 0x02),
so every key pair used as a signer must have an even-y public key;
``Secp256k1KeyPair`` normalizes generated keys accordingly.

Message hashes are 256-bit integers and are signed as-is (prehashed),
not hashed again.
"""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    decode_dss_signature,
    encode_dss_signature,
)
from structlog import get_logger

from multisig_account.application.ports.signature_verifier import (
    SignatureVerifierProtocol,
)
from multisig_account.domain.models.signer_signature import SignerSignature

logger = get_logger()

# Group order of secp256k1.
CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

_HASH_BYTES = 32
_EVEN_Y_PREFIX = b"\x02"


def _signature_algorithm() -> ec.ECDSA:
    return ec.ECDSA(Prehashed(hashes.SHA256()))


def _hash_bytes(message_hash: int) -> bytes:
    return message_hash.to_bytes(_HASH_BYTES, "big")


class Secp256k1SignatureVerifier(SignatureVerifierProtocol):
    """Production signature verifier backed by ``cryptography``.

    Every malformed input (out-of-range hash or scalars, an id that is
    not the x-coordinate of a curve point) verifies as False.
    """

    async def verify(self, message_hash: int, public_key: int, r: int, s: int) -> bool:
        if not 0 <= message_hash < 2 ** (8 * _HASH_BYTES):
            return False
        if not (0 < r < CURVE_ORDER and 0 < s < CURVE_ORDER):
            return False

        try:
            key = ec.EllipticCurvePublicKey.from_encoded_point(
                ec.SECP256K1(), _EVEN_Y_PREFIX + public_key.to_bytes(_HASH_BYTES, "big")
            )
        except (OverflowError, ValueError):
            logger.debug("invalid_public_key", public_key=hex(public_key))
            return False

        try:
            key.verify(
                encode_dss_signature(r, s),
                _hash_bytes(message_hash),
                _signature_algorithm(),
            )
        except InvalidSignature:
            return False
        return True

    def get_algorithm(self) -> str:
        return "ECDSA-secp256k1"


@dataclass(frozen=True)
class Secp256k1KeyPair:
    """Signing key whose public key has an even y-coordinate.

    Used by clients and tests to produce signer ids and signatures the
    verifier accepts.

    Example:
        >>> pair = Secp256k1KeyPair.generate()
        >>> signature = pair.sign(message_hash)
        >>> signature.signer == pair.signer_id
        True
    """

    private_key: ec.EllipticCurvePrivateKey

    @classmethod
    def generate(cls) -> "Secp256k1KeyPair":
        return cls._normalized(ec.generate_private_key(ec.SECP256K1()))

    @classmethod
    def from_secret(cls, secret: int) -> "Secp256k1KeyPair":
        """Derive from a private scalar in [1, CURVE_ORDER).

        Raises:
            ValueError: If ``secret`` is out of range.
        """
        if not 0 < secret < CURVE_ORDER:
            raise ValueError("secret must be in [1, CURVE_ORDER)")
        return cls._normalized(ec.derive_private_key(secret, ec.SECP256K1()))

    @classmethod
    def _normalized(cls, key: ec.EllipticCurvePrivateKey) -> "Secp256k1KeyPair":
        # (n - d)G is the same point with y negated.
        if key.public_key().public_numbers().y % 2:
            secret = CURVE_ORDER - key.private_numbers().private_value
            key = ec.derive_private_key(secret, ec.SECP256K1())
        return cls(private_key=key)

    @property
    def signer_id(self) -> int:
        return self.private_key.public_key().public_numbers().x

    def sign(self, message_hash: int) -> SignerSignature:
        der = self.private_key.sign(_hash_bytes(message_hash), _signature_algorithm())
        r, s = decode_dss_signature(der)
        return SignerSignature(signer=self.signer_id, r=r, s=s)
