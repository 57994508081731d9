"""Unit tests for the inbound transaction request DTOs."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from multisig_account.application.dtos import CallModel, TransactionRequestModel
from multisig_account.domain.errors.authentication import InvalidSignatureLengthError
from multisig_account.domain.models.request import Call
from multisig_account.domain.models.signer_signature import SignerSignature


def make_payload(**overrides) -> dict:
    payload = {
        "version": 3,
        "transaction_hash": "0x1234",
        "signature": ["0xa", "1", 2],
        "calls": [{"to": "0x70ce", "selector": "transfer", "calldata": ["0x1", 5]}],
    }
    payload.update(overrides)
    return payload


class TestCallModel:
    def test_parses_hex_and_decimal(self) -> None:
        call = CallModel.model_validate(
            {"to": "0xACC0", "selector": "set_threshold", "calldata": [" 0x2 ", "10"]}
        )
        assert call.to == 0xACC0
        assert call.calldata == [2, 10]

    def test_to_domain(self) -> None:
        call = CallModel(to=1, selector="get_threshold")
        assert call.to_domain() == Call(target=1, selector="get_threshold", args=())

    @pytest.mark.parametrize(
        "to",
        [True, -1, 2**256, "0xZZ", "abc", 1.5],
    )
    def test_rejects_invalid_felts(self, to: object) -> None:
        with pytest.raises(ValidationError):
            CallModel.model_validate({"to": to, "selector": "x"})

    def test_rejects_empty_selector(self) -> None:
        with pytest.raises(ValidationError):
            CallModel(to=1, selector="")

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValidationError):
            CallModel.model_validate({"to": 1, "selector": "x", "value": 5})


class TestTransactionRequestModel:
    def test_to_domain(self) -> None:
        request = TransactionRequestModel.model_validate(make_payload()).to_domain()

        assert request.version == 3
        assert request.transaction_hash == 0x1234
        assert request.signatures == (SignerSignature(signer=0xA, r=1, s=2),)
        assert request.calls == (
            Call(target=0x70CE, selector="transfer", args=(1, 5)),
        )

    def test_query_version_accepted(self) -> None:
        model = TransactionRequestModel.model_validate(
            make_payload(version=hex(2**128 + 3))
        )
        assert model.version == 2**128 + 3

    def test_zero_hash_rejected(self) -> None:
        with pytest.raises(ValidationError, match="transaction_hash must be nonzero"):
            TransactionRequestModel.model_validate(make_payload(transaction_hash="0x0"))

    def test_partial_signature_fails_on_conversion(self) -> None:
        model = TransactionRequestModel.model_validate(make_payload(signature=[1, 2]))
        with pytest.raises(InvalidSignatureLengthError):
            model.to_domain()

    def test_model_is_frozen(self) -> None:
        model = TransactionRequestModel.model_validate(make_payload())
        with pytest.raises(ValidationError):
            model.version = 1
