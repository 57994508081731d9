"""Combined threshold / signer-count invariant.

Every construction and governance operation re-checks this invariant on
the candidate configuration before anything is committed.
"""

from __future__ import annotations

from multisig_account.domain.errors.policy import (
    InvalidSignerCountError,
    InvalidThresholdError,
)
from multisig_account.domain.primitives.account_constants import MAX_SIGNERS


def assert_valid_threshold_and_signers_count(threshold: int, signers_count: int) -> None:
    """Assert ``1 <= threshold <= signers_count`` and ``1 <= signers_count <= MAX_SIGNERS``.

    Args:
        threshold: Candidate threshold.
        signers_count: Candidate number of signers.

    Raises:
        InvalidThresholdError: If threshold is below 1 or above the count.
        InvalidSignerCountError: If the count is outside [1, MAX_SIGNERS].
    """
    if threshold < 1:
        raise InvalidThresholdError(threshold, signers_count)
    if not 1 <= signers_count <= MAX_SIGNERS:
        raise InvalidSignerCountError(signers_count)
    if threshold > signers_count:
        raise InvalidThresholdError(threshold, signers_count)
