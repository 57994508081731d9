"""Production adapters for the account's ports."""

from multisig_account.infrastructure.adapters.secp256k1 import (
    CURVE_ORDER,
    Secp256k1KeyPair,
    Secp256k1SignatureVerifier,
)

__all__ = ["CURVE_ORDER", "Secp256k1KeyPair", "Secp256k1SignatureVerifier"]
