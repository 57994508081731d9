"""Self-authorization predicate shared by every mutating entry point."""

from __future__ import annotations

import structlog

from multisig_account.domain.errors.policy import OnlySelfAllowedError
from multisig_account.domain.models.account_state import AccountState

log = structlog.get_logger()


def assert_only_self(state: AccountState, caller: int, operation: str) -> None:
    """Require that ``caller`` is the account itself.

    Args:
        state: State of the account being mutated.
        caller: Address that invoked the entry point.
        operation: Entry point name, for logging.

    Raises:
        OnlySelfAllowedError: If the caller is anyone else.
    """
    if caller != state.address:
        log.warning(
            "only_self_rejected",
            operation=operation,
            caller=hex(caller),
            account=hex(state.address),
        )
        raise OnlySelfAllowedError(caller=caller, account=state.address)
