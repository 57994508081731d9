"""Account code registry stub implementation.

In-memory host code primitives. Code ids must be declared before they
can be activated or library-called. A declared code advertises a set of
interface ids and optionally overrides entry points with custom
handlers, which is how tests model a new implementation's migration
logic. Entry points without an override run against the account's own
calldata router.

Usage in tests:
    registry = AccountCodeRegistryStub()
    registry.declare_account_code(ACCOUNT_CODE)
    registry.declare_account_code(
        NEW_CODE,
        overrides={"execute_after_upgrade": migration_handler},
    )
    registry.declare(LEGACY_CODE, interfaces={LEGACY_ACCOUNT_INTERFACE_ID})
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from structlog import get_logger

from multisig_account.application.ports.code_registry import (
    AccountCodeRegistryProtocol,
)
from multisig_account.domain.errors.upgrade import InvalidCodeError
from multisig_account.domain.primitives.account_constants import (
    SUPPORTED_INTERFACE_IDS,
)

if TYPE_CHECKING:
    from multisig_account.application.services.multisig_account import MultisigAccount

logger = get_logger()

EntrypointOverride = Callable[
    ["MultisigAccount", Sequence[int]], Awaitable[Sequence[int]]
]
"""(account, args) -> flat return data"""


@dataclass
class DeclaredCode:
    """A declared code id.

    Attributes:
        code_id: The code id.
        interfaces: Interface ids the code reports as supported.
        overrides: Entry points replaced by custom handlers.
    """

    code_id: int
    interfaces: frozenset[int]
    overrides: dict[str, EntrypointOverride] = field(default_factory=dict)


class AccountCodeRegistryStub(AccountCodeRegistryProtocol):
    """In-memory code declarations and active-code table.

    Attributes:
        activations: Every successful set_active_code as (address, code_id).
        library_calls: Every library_call as (code_id, selector, args).
    """

    def __init__(self) -> None:
        self._codes: dict[int, DeclaredCode] = {}
        self._active: dict[int, int] = {}
        self.activations: list[tuple[int, int]] = []
        self.library_calls: list[tuple[int, str, tuple[int, ...]]] = []

    def declare(
        self,
        code_id: int,
        interfaces: Iterable[int] = (),
        overrides: Mapping[str, EntrypointOverride] | None = None,
    ) -> DeclaredCode:
        declared = DeclaredCode(
            code_id=code_id,
            interfaces=frozenset(interfaces),
            overrides=dict(overrides or {}),
        )
        self._codes[code_id] = declared
        return declared

    def declare_account_code(
        self,
        code_id: int,
        overrides: Mapping[str, EntrypointOverride] | None = None,
    ) -> DeclaredCode:
        """Declare a code that implements the account interfaces."""
        return self.declare(code_id, SUPPORTED_INTERFACE_IDS, overrides)

    def is_declared(self, code_id: int) -> bool:
        return code_id in self._codes

    async def supports_interface(self, code_id: int, interface_id: int) -> bool:
        declared = self._codes.get(code_id)
        return declared is not None and interface_id in declared.interfaces

    async def set_active_code(self, address: int, code_id: int) -> None:
        if code_id not in self._codes:
            logger.debug("undeclared_code_rejected", code_id=hex(code_id))
            raise InvalidCodeError(code_id)
        self._active[address] = code_id
        self.activations.append((address, code_id))

    async def get_active_code(self, address: int) -> int | None:
        return self._active.get(address)

    async def library_call(
        self,
        code_id: int,
        selector: str,
        account: MultisigAccount,
        args: Sequence[int],
    ) -> tuple[int, ...]:
        declared = self._codes.get(code_id)
        if declared is None:
            raise InvalidCodeError(code_id)
        self.library_calls.append((code_id, selector, tuple(args)))

        override = declared.overrides.get(selector)
        if override is not None:
            return tuple(await override(account, args))
        # Library calls run in the account's own context.
        return await account.handle_call(selector, args, caller=account.address)
