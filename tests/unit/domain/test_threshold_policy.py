"""Unit tests for the combined threshold / signer-count invariant."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from multisig_account.domain.errors.policy import (
    InvalidSignerCountError,
    InvalidThresholdError,
)
from multisig_account.domain.primitives.account_constants import (
    MAX_SIGNERS,
    QUERY_VERSION_OFFSET,
    is_supported_tx_version,
    is_valid_signer_id,
)
from multisig_account.domain.primitives.threshold_policy import (
    assert_valid_threshold_and_signers_count,
)


class TestAssertValidThresholdAndSignersCount:
    """Tests for assert_valid_threshold_and_signers_count."""

    @pytest.mark.parametrize(
        ("threshold", "count"), [(1, 1), (1, 3), (3, 3), (MAX_SIGNERS, MAX_SIGNERS)]
    )
    def test_valid_combinations(self, threshold: int, count: int) -> None:
        assert_valid_threshold_and_signers_count(threshold, count)

    def test_zero_threshold(self) -> None:
        with pytest.raises(InvalidThresholdError) as exc_info:
            assert_valid_threshold_and_signers_count(0, 3)
        assert exc_info.value.threshold == 0
        assert exc_info.value.signers_count == 3

    def test_threshold_above_count(self) -> None:
        with pytest.raises(InvalidThresholdError):
            assert_valid_threshold_and_signers_count(4, 3)

    def test_zero_signers(self) -> None:
        with pytest.raises(InvalidSignerCountError):
            assert_valid_threshold_and_signers_count(1, 0)

    def test_too_many_signers(self) -> None:
        with pytest.raises(InvalidSignerCountError):
            assert_valid_threshold_and_signers_count(1, MAX_SIGNERS + 1)

    @given(st.integers(-5, MAX_SIGNERS + 5), st.integers(-5, MAX_SIGNERS + 5))
    def test_accepts_exactly_the_valid_region(self, threshold: int, count: int) -> None:
        valid = 1 <= threshold <= count <= MAX_SIGNERS
        try:
            assert_valid_threshold_and_signers_count(threshold, count)
        except (InvalidThresholdError, InvalidSignerCountError):
            assert not valid
        else:
            assert valid


class TestAccountConstants:
    """Tests for the protocol predicates."""

    @pytest.mark.parametrize("version", [1, 2, 3])
    def test_supported_versions(self, version: int) -> None:
        assert is_supported_tx_version(version)

    @pytest.mark.parametrize("version", [0, 4, 2**127])
    def test_unsupported_versions(self, version: int) -> None:
        assert not is_supported_tx_version(version)

    def test_query_versions_follow_flag(self) -> None:
        query = QUERY_VERSION_OFFSET + 3
        assert is_supported_tx_version(query, allow_query=True)
        assert not is_supported_tx_version(query, allow_query=False)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1, True), (2**256 - 1, True), (0, False), (2**256, False), (True, False)],
    )
    def test_valid_signer_ids(self, value: int, expected: bool) -> None:
        assert is_valid_signer_id(value) is expected
