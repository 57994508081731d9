"""Reentrancy guard for the execution path.

A single flag in the account state, held for the whole of one execution
and released on every exit path, including errors raised by dispatched
calls. It is the only concurrency primitive the account needs: the host
serializes requests per account, so the one hazard is a dispatched call
transitively re-entering ``execute``.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from multisig_account.domain.errors.protocol import ReentrantCallError
from multisig_account.domain.models.account_state import AccountState

log = structlog.get_logger()


class ReentrancyGuard:
    """Non-reentrant lock scoped to one account's execute path.

    Example:
        >>> guard = ReentrancyGuard(state)
        >>> with guard.hold():
        ...     ...  # dispatch calls; a nested hold() raises ReentrantCallError
    """

    def __init__(self, state: AccountState) -> None:
        self._state = state
        self._log = log.bind(service="reentrancy_guard", account=hex(state.address))

    @property
    def is_held(self) -> bool:
        return self._state.execution_active

    def check(self) -> None:
        """Raise if an execution is already in flight."""
        if self._state.execution_active:
            self._log.warning("reentrant_call_rejected")
            raise ReentrantCallError()

    @contextmanager
    def hold(self) -> Iterator[None]:
        """Acquire for the duration of the block.

        Raises:
            ReentrantCallError: If already held.
        """
        self.check()
        self._state.execution_active = True
        try:
            yield
        finally:
            self._state.execution_active = False
