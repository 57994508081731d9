"""Request-scoped event journal.

Change records are broadcast fire-and-forget, but a rejected request must
leave no trace, including its change records. Inside a journal
transaction events are buffered; they are released when the outermost
transaction succeeds and dropped when any enclosing one fails.
Outside a transaction, events go straight to the emitter.

Broadcast happens after the request has committed, so an emitter failure
is logged and never fails or rolls back the request.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from structlog import get_logger

from multisig_account.application.ports.event_emitter import (
    AccountEventEmitterProtocol,
)
from multisig_account.domain.events import AccountEvent

logger = get_logger()


class EventJournal:
    """Buffers account events per request and flushes them on success.

    Attributes:
        _emitter: Broadcast primitive.
        _address: Account the events belong to.
        _buffer: Pending events, or None outside a transaction.
    """

    def __init__(self, emitter: AccountEventEmitterProtocol, address: int) -> None:
        self._emitter = emitter
        self._address = address
        self._buffer: list[AccountEvent] | None = None

    async def record(self, event: AccountEvent) -> None:
        if self._buffer is not None:
            self._buffer.append(event)
            return
        await self._broadcast(event)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Buffer events for the duration of the block.

        Nested transactions fold into the enclosing one on success.
        """
        outer = self._buffer
        self._buffer = []
        try:
            yield
        except BaseException:
            dropped = len(self._buffer)
            self._buffer = outer
            if dropped:
                logger.debug("journal_events_dropped", count=dropped)
            raise
        pending, self._buffer = self._buffer, outer
        if outer is not None:
            outer.extend(pending)
            return
        for event in pending:
            await self._broadcast(event)

    async def _broadcast(self, event: AccountEvent) -> None:
        try:
            await self._emitter.emit(self._address, event)
        except Exception as exc:
            logger.error(
                "event_broadcast_failed",
                account=hex(self._address),
                event_type=event.event_type,
                error=str(exc),
            )
