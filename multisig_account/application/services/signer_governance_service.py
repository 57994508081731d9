"""Signer governance service.

Self-authorized mutators of the signer registry and threshold.

Every operation follows the same shape:
1. Self-authorization (caller must be the account)
2. Registry mutation on a copy - registry errors propagate unchanged
3. Combined invariant check on the candidate:
   1 <= threshold <= count <= MAX_SIGNERS
4. Commit registry and threshold together
5. Record a ConfigurationUpdated change listing exactly what this call
   added/removed

A failure at any step leaves registry and threshold untouched.
"""

from __future__ import annotations

from structlog import get_logger

from multisig_account.application.services.event_journal import EventJournal
from multisig_account.application.services.self_authorization import assert_only_self
from multisig_account.domain.events.configuration import (
    ConfigurationUpdatedEventPayload,
)
from multisig_account.domain.errors.policy import PolicyViolationError
from multisig_account.domain.models.account_state import AccountState
from multisig_account.domain.models.signer_registry import SignerRegistry
from multisig_account.domain.primitives.threshold_policy import (
    assert_valid_threshold_and_signers_count,
)

logger = get_logger()


class SignerGovernanceService:
    """Mutates the signer registry and threshold under self-authorization.

    Attributes:
        _state: The account state being governed.
        _journal: Change-record journal.
    """

    def __init__(self, state: AccountState, journal: EventJournal) -> None:
        self._state = state
        self._journal = journal

    async def set_threshold(self, new_threshold: int, *, caller: int) -> None:
        """Change the threshold, keeping the registry as is.

        Raises:
            OnlySelfAllowedError: If caller is not the account.
            InvalidThresholdError: If new_threshold is not in [1, count].
        """
        assert_only_self(self._state, caller, "set_threshold")
        candidate = self._state.registry.copy()
        await self._commit(candidate, new_threshold, added=(), removed=())

    async def add_signers(
        self, new_threshold: int, signers_to_add: list[int], *, caller: int
    ) -> None:
        """Append signers and set a new threshold.

        Raises:
            OnlySelfAllowedError: If caller is not the account.
            InvalidSignerError, DuplicateSignerError, CapacityExceededError:
                From the registry.
            InvalidThresholdError: If new_threshold is not in [1, count].
        """
        assert_only_self(self._state, caller, "add_signers")
        candidate = self._state.registry.copy()
        candidate.add(list(signers_to_add), last_hint=self._state.registry.last)
        await self._commit(candidate, new_threshold, added=tuple(signers_to_add), removed=())

    async def remove_signers(
        self, new_threshold: int, signers_to_remove: list[int], *, caller: int
    ) -> None:
        """Remove signers and set a new threshold.

        Raises:
            OnlySelfAllowedError: If caller is not the account.
            UnknownSignerError, LastSignerInvariantError: From the registry.
            InvalidThresholdError: If new_threshold is not in [1, count].
        """
        assert_only_self(self._state, caller, "remove_signers")
        candidate = self._state.registry.copy()
        candidate.remove(list(signers_to_remove), last_hint=self._state.registry.last)
        await self._commit(
            candidate, new_threshold, added=(), removed=tuple(signers_to_remove)
        )

    async def replace_signer(
        self, signer_to_remove: int, signer_to_add: int, *, caller: int
    ) -> None:
        """Swap one signer for another; count and threshold are unchanged.

        Raises:
            OnlySelfAllowedError: If caller is not the account.
            UnknownSignerError, DuplicateSignerError, InvalidSignerError:
                From the registry.
        """
        assert_only_self(self._state, caller, "replace_signer")
        candidate = self._state.registry.copy()
        candidate.replace(
            signer_to_remove, signer_to_add, last_hint=self._state.registry.last
        )
        await self._commit(
            candidate,
            self._state.threshold,
            added=(signer_to_add,),
            removed=(signer_to_remove,),
        )

    async def _commit(
        self,
        candidate: SignerRegistry,
        new_threshold: int,
        *,
        added: tuple[int, ...],
        removed: tuple[int, ...],
    ) -> None:
        log = logger.bind(
            service="signer_governance",
            account=hex(self._state.address),
            new_threshold=new_threshold,
            new_signers_count=candidate.count,
        )
        try:
            assert_valid_threshold_and_signers_count(new_threshold, candidate.count)
        except PolicyViolationError as exc:
            log.warning("configuration_rejected", error=exc.code)
            raise

        self._state.commit_policy(candidate, new_threshold)
        await self._journal.record(
            ConfigurationUpdatedEventPayload(
                new_threshold=new_threshold,
                new_signers_count=candidate.count,
                added_signers=added,
                removed_signers=removed,
            )
        )
        log.info(
            "configuration_updated",
            added=[hex(s) for s in added],
            removed=[hex(s) for s in removed],
        )
