"""Upgrade record event."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

ACCOUNT_UPGRADED_EVENT_TYPE = "account.upgraded"


@dataclass(frozen=True)
class AccountUpgradedEventPayload:
    """Emitted after an upgrade and its migration callback both succeed.

    Attributes:
        new_implementation: Code id now running the account.
    """

    event_type: ClassVar[str] = ACCOUNT_UPGRADED_EVENT_TYPE

    new_implementation: int

    def to_dict(self) -> dict[str, Any]:
        return {"new_implementation": hex(self.new_implementation)}
