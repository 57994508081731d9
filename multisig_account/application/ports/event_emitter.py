"""Account event emitter port.

Fire-and-forget broadcast of change records. The account never waits
for an acknowledgment and never reads events back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from multisig_account.domain.events import AccountEvent


class AccountEventEmitterProtocol(ABC):
    """Protocol for broadcasting account events.

    Example:
        emitter = AccountEventEmitterStub()
        await emitter.emit(account_address, ConfigurationUpdatedEventPayload(...))
    """

    @abstractmethod
    async def emit(self, account_address: int, event: AccountEvent) -> None:
        """Broadcast one event emitted by ``account_address``."""
        ...
