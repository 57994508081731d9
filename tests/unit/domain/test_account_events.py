"""Unit tests for account change-record payloads and error codes."""

from __future__ import annotations

from multisig_account.domain.exceptions import AccountError
from multisig_account.domain.errors import (
    CapacityExceededError,
    InvalidSignatureError,
    InvalidSignerCountError,
    LastSignerInvariantError,
    NotASignerError,
    OnlySelfAllowedError,
    ReentrantCallError,
)
from multisig_account.domain.events import (
    AccountUpgradedEventPayload,
    ConfigurationUpdatedEventPayload,
    TransactionExecutedEventPayload,
)
from multisig_account.domain.models.request import CallResult


class TestConfigurationUpdatedEventPayload:
    """Tests for ConfigurationUpdatedEventPayload."""

    def test_to_dict_uses_hex_signers(self) -> None:
        payload = ConfigurationUpdatedEventPayload(
            new_threshold=2,
            new_signers_count=3,
            added_signers=(0xA,),
            removed_signers=(0xB,),
        )
        assert payload.to_dict() == {
            "new_threshold": 2,
            "new_signers_count": 3,
            "added_signers": ["0xa"],
            "removed_signers": ["0xb"],
        }

    def test_content_hash_is_deterministic(self) -> None:
        first = ConfigurationUpdatedEventPayload(new_threshold=1, new_signers_count=1)
        second = ConfigurationUpdatedEventPayload(new_threshold=1, new_signers_count=1)
        other = ConfigurationUpdatedEventPayload(new_threshold=1, new_signers_count=2)
        assert first.content_hash() == second.content_hash()
        assert first.content_hash() != other.content_hash()
        assert len(first.content_hash()) == 64

    def test_event_type(self) -> None:
        assert ConfigurationUpdatedEventPayload.event_type == "account.configuration_updated"


class TestTransactionExecutedEventPayload:
    def test_to_dict(self) -> None:
        payload = TransactionExecutedEventPayload(
            transaction_hash=0x1234,
            results=(CallResult(target=0x70CE, selector="transfer", data=(1,)),),
        )
        assert payload.to_dict() == {
            "transaction_hash": "0x1234",
            "results": [{"target": "0x70ce", "selector": "transfer", "data": ["0x1"]}],
        }


class TestAccountUpgradedEventPayload:
    def test_event_type(self) -> None:
        payload = AccountUpgradedEventPayload(new_implementation=0xC0DE2)
        assert payload.event_type == "account.upgraded"


class TestAccountErrors:
    """Tests for the error hierarchy."""

    def test_every_error_is_an_account_error(self) -> None:
        for error in (
            OnlySelfAllowedError(caller=1, account=2),
            NotASignerError(0xA),
            InvalidSignatureError(0xA),
            ReentrantCallError(),
        ):
            assert isinstance(error, AccountError)

    def test_count_errors_share_a_base(self) -> None:
        assert issubclass(LastSignerInvariantError, InvalidSignerCountError)
        assert issubclass(CapacityExceededError, InvalidSignerCountError)

    def test_message_carries_code(self) -> None:
        error = OnlySelfAllowedError(caller=0x1, account=0xACC0)
        assert str(error).startswith(OnlySelfAllowedError.code)
        assert ReentrantCallError.code != OnlySelfAllowedError.code
