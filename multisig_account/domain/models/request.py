"""Request, call and result models for the execution pipeline.

Only the fields the account reads from a host transaction are modelled:
version, hash, signature list and call list.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from multisig_account.domain.models.signer_signature import SignerSignature


@dataclass(frozen=True)
class Call:
    """A single call in a request's call list.

    Attributes:
        target: Address of the contract to call.
        selector: Entry point name.
        args: Flat calldata.
    """

    target: int
    selector: str
    args: tuple[int, ...] = ()

    def targets(self, address: int) -> bool:
        return self.target == address


@dataclass(frozen=True)
class CallResult:
    """Return data of one dispatched call.

    Attributes:
        target: Address that was called.
        selector: Entry point that was called.
        data: Flat return data.
    """

    target: int
    selector: str
    data: tuple[int, ...] = ()


@dataclass(frozen=True)
class AccountRequest:
    """A host transaction as seen by the account.

    Attributes:
        version: Declared transaction version.
        transaction_hash: Hash the signatures must cover.
        signatures: Aggregate signature, in presented order.
        calls: Calls to dispatch, in order.
    """

    version: int
    transaction_hash: int
    signatures: tuple[SignerSignature, ...] = field(default_factory=tuple)
    calls: tuple[Call, ...] = field(default_factory=tuple)
