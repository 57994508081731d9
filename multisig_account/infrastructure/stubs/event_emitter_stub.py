"""Stub implementation of AccountEventEmitterProtocol for testing.

This stub captures emitted events for test assertions without a real
broadcast channel.

Usage in tests:
    emitter = AccountEventEmitterStub()
    account = await build_account(..., emitter=emitter)

    await account.execute(request, caller=0)

    assert emitter.events_of_type(TransactionExecutedEventPayload)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TypeVar

from multisig_account.application.ports.event_emitter import (
    AccountEventEmitterProtocol,
)
from multisig_account.domain.events import AccountEvent

EventT = TypeVar("EventT")


@dataclass(frozen=True)
class EmittedAccountEvent:
    """Record of one broadcast event.

    Attributes:
        account_address: Account that emitted the event.
        event: The event payload.
        emitted_at: When the event was emitted.
    """

    account_address: int
    event: AccountEvent
    emitted_at: datetime


class AccountEventEmitterStub(AccountEventEmitterProtocol):
    """Captures every emitted account event in order.

    Attributes:
        emitted: All emitted events, in emission order.
        fail_exception: If set, emit() raises this exception.
        fail_after: If set, emit() raises once this many events were captured.
    """

    def __init__(self) -> None:
        self.emitted: list[EmittedAccountEvent] = []
        self.fail_exception: Exception | None = None
        self.fail_after: int | None = None

    async def emit(self, account_address: int, event: AccountEvent) -> None:
        if self.fail_exception is not None:
            raise self.fail_exception
        if self.fail_after is not None and len(self.emitted) >= self.fail_after:
            raise RuntimeError("event channel unavailable")
        self.emitted.append(
            EmittedAccountEvent(
                account_address=account_address,
                event=event,
                emitted_at=datetime.now(timezone.utc),
            )
        )

    @property
    def events(self) -> list[AccountEvent]:
        return [record.event for record in self.emitted]

    def events_of_type(self, event_cls: type[EventT]) -> list[EventT]:
        return [event for event in self.events if isinstance(event, event_cls)]

    def reset(self) -> None:
        self.emitted.clear()
        self.fail_exception = None
        self.fail_after = None
