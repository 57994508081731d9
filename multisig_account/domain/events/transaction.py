"""Execution record event, emitted once per successfully executed request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from multisig_account.domain.models.request import CallResult

TRANSACTION_EXECUTED_EVENT_TYPE = "account.transaction_executed"


@dataclass(frozen=True)
class TransactionExecutedEventPayload:
    """Execution record keyed by the request hash.

    Attributes:
        transaction_hash: Hash of the executed request.
        results: Ordered result bundles, one per call.
    """

    event_type: ClassVar[str] = TRANSACTION_EXECUTED_EVENT_TYPE

    transaction_hash: int
    results: tuple[CallResult, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "transaction_hash": hex(self.transaction_hash),
            "results": [
                {
                    "target": hex(result.target),
                    "selector": result.selector,
                    "data": [hex(value) for value in result.data],
                }
                for result in self.results
            ],
        }
