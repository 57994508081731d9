"""Upgrade protocol service.

Self-authorized replacement of the account's executable code.

upgrade(new_code_id, calldata):
1. Self-authorization
2. Introspection: the target code must declare the account interface id
3. Switch the active code and record AccountUpgraded
4. Same-transaction callback: ``execute_after_upgrade(previous_version,
   calldata)`` on the NEW code

If the callback fails, the code switch is reverted and the error
propagates: the old code stays active.

execute_after_upgrade(previous_version, data):
Reserved for chained upgrades. Data must be empty. If a previous chained
upgrade staged a pending code id, switch to it and clear the stage;
otherwise do nothing. A consumed stage records its own AccountUpgraded,
so the last record names the code that ends up active.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from structlog import get_logger

from multisig_account.application.ports.code_registry import (
    AccountCodeRegistryProtocol,
)
from multisig_account.application.services.event_journal import EventJournal
from multisig_account.application.services.self_authorization import assert_only_self
from multisig_account.domain.errors.upgrade import (
    InvalidImplementationError,
    UnexpectedDataError,
)
from multisig_account.domain.events.upgrade import AccountUpgradedEventPayload
from multisig_account.domain.models.account_state import AccountState
from multisig_account.domain.models.calldata import CalldataReader, encode_array
from multisig_account.domain.models.version import Version
from multisig_account.domain.primitives.account_constants import (
    ACCOUNT_INTERFACE_ID,
    EXECUTE_AFTER_UPGRADE_SELECTOR,
)

if TYPE_CHECKING:
    from multisig_account.application.services.multisig_account import MultisigAccount

logger = get_logger()


class UpgradeService:
    """Runs the two-phase code upgrade protocol for one account.

    Attributes:
        _state: The account state.
        _code_registry: Host code primitives.
        _journal: Change-record journal.
    """

    def __init__(
        self,
        state: AccountState,
        code_registry: AccountCodeRegistryProtocol,
        journal: EventJournal,
    ) -> None:
        self._state = state
        self._code_registry = code_registry
        self._journal = journal

    async def upgrade(
        self,
        account: MultisigAccount,
        new_code_id: int,
        calldata: Sequence[int],
        *,
        caller: int,
    ) -> tuple[int, ...]:
        """Switch the account to ``new_code_id`` and run its migration.

        Args:
            account: The account being upgraded (target of the callback).
            new_code_id: Code to adopt.
            calldata: Opaque migration data for the callback.
            caller: Address that invoked the entry point.

        Returns:
            The callback's return data, decoded from its length-prefixed form.

        Raises:
            OnlySelfAllowedError: If caller is not the account.
            InvalidImplementationError: If the code lacks the account interface.
            InvalidCodeError: If the host refuses the code id.
            AccountError: Any failure of the migration callback.
        """
        assert_only_self(self._state, caller, "upgrade")
        log = logger.bind(
            operation="upgrade",
            account=hex(self._state.address),
            new_code_id=hex(new_code_id),
        )

        if not await self._code_registry.supports_interface(new_code_id, ACCOUNT_INTERFACE_ID):
            log.warning("invalid_implementation")
            raise InvalidImplementationError(new_code_id)

        previous_version = account.get_version()
        snapshot = self._state.snapshot()

        async with self._journal.transaction():
            try:
                await self._code_registry.set_active_code(self._state.address, new_code_id)
                self._state.active_code_id = new_code_id
                self._state.migration = self._state.migration.begin_callback()
                await self._journal.record(
                    AccountUpgradedEventPayload(new_implementation=new_code_id)
                )
                raw = await self._code_registry.library_call(
                    new_code_id,
                    EXECUTE_AFTER_UPGRADE_SELECTOR,
                    account,
                    [*previous_version.to_calldata(), *encode_array(list(calldata))],
                )
                reader = CalldataReader(raw)
                result = tuple(reader.read_array())
                reader.finish()
                self._state.migration = self._state.migration.settle()
            except Exception:
                log.warning("upgrade_rolled_back", previous_code_id=hex(snapshot.active_code_id))
                self._state.restore(snapshot)
                await self._code_registry.set_active_code(
                    self._state.address, snapshot.active_code_id
                )
                raise

        log.info("account_upgraded", previous_version=str(previous_version))
        return result

    async def execute_after_upgrade(
        self, previous_version: Version, data: Sequence[int], *, caller: int
    ) -> tuple[int, ...]:
        """Complete a chained upgrade if one is staged.

        Raises:
            OnlySelfAllowedError: If caller is not the account.
            UnexpectedDataError: If ``data`` is not empty.
            InvalidCodeError: If the staged code id is refused by the host.
        """
        assert_only_self(self._state, caller, "execute_after_upgrade")
        log = logger.bind(
            operation="execute_after_upgrade",
            account=hex(self._state.address),
            previous_version=str(previous_version),
        )

        if data:
            log.warning("unexpected_upgrade_data", length=len(data))
            raise UnexpectedDataError(
                f"{UnexpectedDataError.code}: expected no data, got {len(data)} values"
            )

        pending = self._state.migration.pending_code_id
        if pending is None:
            log.debug("no_pending_implementation")
            return ()

        await self._code_registry.set_active_code(self._state.address, pending)
        self._state.active_code_id = pending
        self._state.migration = self._state.migration.consume_pending()
        await self._journal.record(AccountUpgradedEventPayload(new_implementation=pending))
        log.info("pending_implementation_activated", code_id=hex(pending))
        return ()
