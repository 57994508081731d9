"""Call dispatcher stub implementation.

In-memory host call primitive. Calls are routed by target address to
either a registered account (through its calldata router) or a
registered contract handler. Failures can be injected per target and
selector.

Usage in tests:
    dispatcher = CallDispatcherStub()
    dispatcher.register_account(account)
    dispatcher.register_contract(TOKEN, token_handler)
    dispatcher.fail_on(TOKEN, "transfer", reason="insufficient balance")
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from structlog import get_logger

from multisig_account.application.ports.call_dispatcher import CallDispatcherProtocol
from multisig_account.domain.errors.dispatch import CallDispatchError
from multisig_account.domain.models.request import Call

if TYPE_CHECKING:
    from multisig_account.application.services.multisig_account import MultisigAccount

logger = get_logger()

ContractHandler = Callable[[str, Sequence[int], int], Awaitable[Sequence[int]]]
"""(selector, args, caller) -> return data"""


@dataclass(frozen=True)
class Invocation:
    """One dispatched call, recorded for test assertions."""

    target: int
    selector: str
    args: tuple[int, ...]
    caller: int


class CallDispatcherStub(CallDispatcherProtocol):
    """Routes calls to in-memory accounts and contract handlers.

    Attributes:
        invocations: Every call that reached the stub, in order, including
            failed ones.
    """

    def __init__(self) -> None:
        self._accounts: dict[int, MultisigAccount] = {}
        self._contracts: dict[int, ContractHandler] = {}
        self._failures: dict[tuple[int, str], str] = {}
        self.invocations: list[Invocation] = []

    def register_account(self, account: MultisigAccount) -> None:
        self._accounts[account.address] = account

    def register_contract(self, address: int, handler: ContractHandler) -> None:
        self._contracts[address] = handler

    def fail_on(self, target: int, selector: str, reason: str = "injected failure") -> None:
        """Make every call to ``selector`` on ``target`` fail."""
        self._failures[(target, selector)] = reason

    def clear_failures(self) -> None:
        self._failures.clear()

    async def invoke(self, call: Call, *, caller: int) -> tuple[int, ...]:
        self.invocations.append(
            Invocation(
                target=call.target,
                selector=call.selector,
                args=tuple(call.args),
                caller=caller,
            )
        )
        log = logger.bind(target=hex(call.target), selector=call.selector)

        reason = self._failures.get((call.target, call.selector))
        if reason is not None:
            log.debug("injected_call_failure", reason=reason)
            raise CallDispatchError(call.target, call.selector, reason)

        account = self._accounts.get(call.target)
        if account is not None:
            return await account.handle_call(call.selector, call.args, caller=caller)

        handler = self._contracts.get(call.target)
        if handler is None:
            log.debug("call_to_unknown_contract")
            raise CallDispatchError(call.target, call.selector, "no contract at address")
        return tuple(await handler(call.selector, call.args, caller))

    def calls_to(self, target: int) -> list[Invocation]:
        return [invocation for invocation in self.invocations if invocation.target == target]
