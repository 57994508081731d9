"""Inbound transaction request DTOs.

Pydantic models for requests arriving as JSON from a host or a client
(hex strings or integers). ``to_domain()`` converts to the domain
AccountRequest the execution pipeline consumes.

Signature structure (length multiple of three, ordering, membership) is
checked by the domain, not here: the DTO only guarantees well-formed
integers.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from multisig_account.domain.models.request import AccountRequest, Call
from multisig_account.domain.models.signer_signature import parse_signature_list

FELT_LIMIT = 2**256


def _parse_felt(value: Any) -> int:
    """Accept ints and 0x-prefixed or decimal strings."""
    if isinstance(value, bool):
        raise ValueError("booleans are not field elements")
    if isinstance(value, str):
        text = value.strip().lower()
        value = int(text, 16) if text.startswith("0x") else int(text, 10)
    if not isinstance(value, int):
        raise ValueError(f"expected int or numeric string, got {type(value).__name__}")
    if not 0 <= value < FELT_LIMIT:
        raise ValueError(f"value out of range: {value:#x}")
    return value


Felt = Annotated[int, BeforeValidator(_parse_felt)]


class CallModel(BaseModel):
    """One call of a transaction request.

    Attributes:
        to: Target contract address.
        selector: Entry point name.
        calldata: Flat calldata.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    to: Felt
    selector: str = Field(min_length=1)
    calldata: list[Felt] = Field(default_factory=list)

    def to_domain(self) -> Call:
        return Call(target=self.to, selector=self.selector, args=tuple(self.calldata))


class TransactionRequestModel(BaseModel):
    """A transaction request addressed to the account.

    Attributes:
        version: Declared transaction version.
        transaction_hash: Hash the signatures cover.
        signature: Flat aggregate signature ``[signer, r, s, ...]``.
        calls: Calls to dispatch, in order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: Felt
    transaction_hash: Felt
    signature: list[Felt] = Field(default_factory=list)
    calls: list[CallModel] = Field(default_factory=list)

    @field_validator("transaction_hash")
    @classmethod
    def transaction_hash_nonzero(cls, value: int) -> int:
        if value == 0:
            raise ValueError("transaction_hash must be nonzero")
        return value

    def to_domain(self) -> AccountRequest:
        """Convert to the domain request.

        Raises:
            InvalidSignatureLengthError: If the signature length is not a
                multiple of three.
        """
        return AccountRequest(
            version=self.version,
            transaction_hash=self.transaction_hash,
            signatures=tuple(parse_signature_list(self.signature)),
            calls=tuple(call.to_domain() for call in self.calls),
        )
