"""Signature aggregation verifier.

Validates an aggregate signature - an ordered list of (signer, r, s) -
against a message hash and the account's threshold.

Rules:
1. Exactly ``threshold`` signatures, no more and no fewer
2. Signers in strictly ascending order. This rejects duplicates and makes
   the encoding canonical: one valid ordering per signer subset, checked
   in O(threshold) with no auxiliary set
3. Every signer is registered
4. Every signature verifies; the first invalid one short-circuits

Bootstrap variant:
``assert_single_signer_signature`` accepts exactly one signature from a
member of the inline signer list of a deployment request, so a new account
can pay for its own deployment with one approver's signature. The weaker
check applies to the deployment window only.
"""

from __future__ import annotations

from collections.abc import Sequence

from structlog import get_logger

from multisig_account.application.ports.signature_verifier import (
    SignatureVerifierProtocol,
)
from multisig_account.domain.errors.authentication import (
    InvalidSignatureError,
    InvalidSignatureLengthError,
    NotASignerError,
    SignersNotSortedError,
)
from multisig_account.domain.models.signer_registry import SignerRegistry
from multisig_account.domain.models.signer_signature import SignerSignature
from multisig_account.domain.primitives.account_constants import NULL_SIGNER

logger = get_logger()


class SignatureAggregationService:
    """Verifies aggregate and bootstrap signatures.

    Attributes:
        _verifier: Single-signature primitive.
    """

    def __init__(self, verifier: SignatureVerifierProtocol) -> None:
        """Initialize the service.

        Args:
            verifier: Signature primitive used for every pair.
        """
        self._verifier = verifier

    async def verify_aggregate(
        self,
        message_hash: int,
        signatures: Sequence[SignerSignature],
        registry: SignerRegistry,
        threshold: int,
    ) -> bool:
        """Check an aggregate signature, reporting crypto mismatches as False.

        Args:
            message_hash: Hash the signatures must cover.
            signatures: Signatures in presented order.
            registry: Current signer registry.
            threshold: Current threshold.

        Returns:
            True if every signature verifies, False on the first that doesn't.

        Raises:
            InvalidSignatureLengthError: If ``len(signatures) != threshold``.
            SignersNotSortedError: If signers are not strictly ascending.
            NotASignerError: If a signer is not registered.
        """
        rejected = await self._find_rejected_signer(
            message_hash, signatures, registry, threshold
        )
        return rejected is None

    async def assert_aggregate(
        self,
        message_hash: int,
        signatures: Sequence[SignerSignature],
        registry: SignerRegistry,
        threshold: int,
    ) -> None:
        """Strict variant of verify_aggregate.

        Raises:
            InvalidSignatureError: If any signature fails verification.
            InvalidSignatureLengthError, SignersNotSortedError, NotASignerError:
                As for verify_aggregate.
        """
        rejected = await self._find_rejected_signer(
            message_hash, signatures, registry, threshold
        )
        if rejected is not None:
            raise InvalidSignatureError(rejected)

    async def _find_rejected_signer(
        self,
        message_hash: int,
        signatures: Sequence[SignerSignature],
        registry: SignerRegistry,
        threshold: int,
    ) -> int | None:
        """Run the aggregate checks; return the first signer whose signature
        does not verify, or None if all do."""
        log = logger.bind(
            operation="verify_aggregate",
            message_hash=hex(message_hash),
            threshold=threshold,
        )

        if len(signatures) != threshold:
            log.warning("invalid_signature_length", actual=len(signatures))
            raise InvalidSignatureLengthError(expected=threshold, actual=len(signatures))

        last_signer = NULL_SIGNER
        for signature in signatures:
            if signature.signer <= last_signer:
                log.warning(
                    "signers_not_sorted",
                    signer=hex(signature.signer),
                    previous=hex(last_signer),
                )
                raise SignersNotSortedError(signer=signature.signer, previous=last_signer)
            if not registry.is_signer(signature.signer):
                log.warning("not_a_signer", signer=hex(signature.signer))
                raise NotASignerError(signature.signer)
            if not await self._verify_one(message_hash, signature):
                log.warning("signature_rejected", signer=hex(signature.signer))
                return signature.signer
            last_signer = signature.signer

        log.debug("aggregate_signature_verified")
        return None

    async def assert_single_signer_signature(
        self,
        message_hash: int,
        signatures: Sequence[SignerSignature],
        signers: Sequence[int],
    ) -> None:
        """Bootstrap check: one valid signature from one of ``signers``.

        Args:
            message_hash: Deployment transaction hash.
            signatures: Signatures attached to the deployment.
            signers: Signer list carried inline by the deployment request.

        Raises:
            InvalidSignatureLengthError: Unless exactly one signature.
            NotASignerError: If its signer is not in ``signers``.
            InvalidSignatureError: If it does not verify.
        """
        log = logger.bind(
            operation="assert_single_signer_signature",
            message_hash=hex(message_hash),
        )

        if len(signatures) != 1:
            log.warning("invalid_signature_length", actual=len(signatures))
            raise InvalidSignatureLengthError(expected=1, actual=len(signatures))

        signature = signatures[0]
        if signature.signer == NULL_SIGNER or signature.signer not in signers:
            log.warning("not_a_signer", signer=hex(signature.signer))
            raise NotASignerError(signature.signer)
        if not await self._verify_one(message_hash, signature):
            log.warning("signature_rejected", signer=hex(signature.signer))
            raise InvalidSignatureError(signature.signer)

        log.info("bootstrap_signature_verified", signer=hex(signature.signer))

    async def _verify_one(self, message_hash: int, signature: SignerSignature) -> bool:
        return await self._verifier.verify(
            message_hash, signature.signer, signature.r, signature.s
        )
