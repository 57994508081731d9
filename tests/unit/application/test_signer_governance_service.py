"""Unit tests for SignerGovernanceService.

Tests self-authorization, the combined threshold/count invariant, atomic
commit and the ConfigurationUpdated change records.
"""

from __future__ import annotations

import pytest

from multisig_account.application.services.event_journal import EventJournal
from multisig_account.application.services.signer_governance_service import (
    SignerGovernanceService,
)
from multisig_account.domain.errors.policy import (
    DuplicateSignerError,
    InvalidSignerCountError,
    InvalidThresholdError,
    LastSignerInvariantError,
    OnlySelfAllowedError,
    UnknownSignerError,
)
from multisig_account.domain.events.configuration import (
    ConfigurationUpdatedEventPayload,
)
from multisig_account.domain.models.account_state import AccountState
from multisig_account.infrastructure.stubs import AccountEventEmitterStub
from tests.helpers import (
    ACCOUNT_ADDRESS,
    SIGNER_A,
    SIGNER_B,
    SIGNER_C,
    SIGNER_D,
    SIGNER_E,
)

OUTSIDER = 0x0BAD


@pytest.fixture
def service(
    account_state: AccountState, emitter_stub: AccountEventEmitterStub
) -> SignerGovernanceService:
    return SignerGovernanceService(
        account_state, EventJournal(emitter_stub, account_state.address)
    )


class TestSelfAuthorization:
    """Every mutator rejects callers other than the account."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "args"),
        [
            ("set_threshold", (1,)),
            ("add_signers", (2, [SIGNER_D])),
            ("remove_signers", (1, [SIGNER_A])),
            ("replace_signer", (SIGNER_A, SIGNER_D)),
        ],
    )
    async def test_outsider_rejected(
        self,
        service: SignerGovernanceService,
        account_state: AccountState,
        emitter_stub: AccountEventEmitterStub,
        method: str,
        args: tuple,
    ) -> None:
        with pytest.raises(OnlySelfAllowedError) as exc_info:
            await getattr(service, method)(*args, caller=OUTSIDER)
        assert exc_info.value.caller == OUTSIDER
        assert account_state.registry.list() == [SIGNER_A, SIGNER_B, SIGNER_C]
        assert account_state.threshold == 2
        assert emitter_stub.emitted == []

    @pytest.mark.asyncio
    async def test_protocol_caller_rejected(self, service: SignerGovernanceService) -> None:
        with pytest.raises(OnlySelfAllowedError):
            await service.set_threshold(1, caller=0)


class TestSetThreshold:
    @pytest.mark.asyncio
    async def test_changes_threshold_and_records(
        self,
        service: SignerGovernanceService,
        account_state: AccountState,
        emitter_stub: AccountEventEmitterStub,
    ) -> None:
        await service.set_threshold(3, caller=ACCOUNT_ADDRESS)

        assert account_state.threshold == 3
        assert emitter_stub.events == [
            ConfigurationUpdatedEventPayload(new_threshold=3, new_signers_count=3)
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("threshold", [0, 4])
    async def test_out_of_range_rejected(
        self,
        service: SignerGovernanceService,
        account_state: AccountState,
        emitter_stub: AccountEventEmitterStub,
        threshold: int,
    ) -> None:
        with pytest.raises(InvalidThresholdError):
            await service.set_threshold(threshold, caller=ACCOUNT_ADDRESS)
        assert account_state.threshold == 2
        assert emitter_stub.emitted == []


class TestAddSigners:
    @pytest.mark.asyncio
    async def test_add_and_raise_threshold(
        self,
        service: SignerGovernanceService,
        account_state: AccountState,
        emitter_stub: AccountEventEmitterStub,
    ) -> None:
        await service.add_signers(3, [SIGNER_D], caller=ACCOUNT_ADDRESS)

        assert account_state.registry.list() == [SIGNER_A, SIGNER_B, SIGNER_C, SIGNER_D]
        assert account_state.threshold == 3
        assert emitter_stub.events == [
            ConfigurationUpdatedEventPayload(
                new_threshold=3, new_signers_count=4, added_signers=(SIGNER_D,)
            )
        ]

    @pytest.mark.asyncio
    async def test_duplicate_rejected_atomically(
        self, service: SignerGovernanceService, account_state: AccountState
    ) -> None:
        with pytest.raises(DuplicateSignerError):
            await service.add_signers(2, [SIGNER_D, SIGNER_A], caller=ACCOUNT_ADDRESS)
        assert account_state.registry.list() == [SIGNER_A, SIGNER_B, SIGNER_C]

    @pytest.mark.asyncio
    async def test_threshold_above_new_count_rolls_back_registry(
        self, service: SignerGovernanceService, account_state: AccountState
    ) -> None:
        with pytest.raises(InvalidThresholdError):
            await service.add_signers(5, [SIGNER_D], caller=ACCOUNT_ADDRESS)
        assert account_state.registry.list() == [SIGNER_A, SIGNER_B, SIGNER_C]
        assert account_state.threshold == 2


class TestRemoveSigners:
    @pytest.mark.asyncio
    async def test_remove_and_lower_threshold(
        self,
        service: SignerGovernanceService,
        account_state: AccountState,
        emitter_stub: AccountEventEmitterStub,
    ) -> None:
        await service.remove_signers(1, [SIGNER_B, SIGNER_C], caller=ACCOUNT_ADDRESS)

        assert account_state.registry.list() == [SIGNER_A]
        assert account_state.threshold == 1
        assert emitter_stub.events[0].removed_signers == (SIGNER_B, SIGNER_C)

    @pytest.mark.asyncio
    async def test_remove_to_zero_rejected(
        self, service: SignerGovernanceService, account_state: AccountState
    ) -> None:
        with pytest.raises(InvalidSignerCountError) as exc_info:
            await service.remove_signers(
                1, [SIGNER_A, SIGNER_B, SIGNER_C], caller=ACCOUNT_ADDRESS
            )
        assert isinstance(exc_info.value, LastSignerInvariantError)
        assert account_state.registry.count == 3

    @pytest.mark.asyncio
    async def test_threshold_above_remaining_rejected(
        self, service: SignerGovernanceService, account_state: AccountState
    ) -> None:
        with pytest.raises(InvalidThresholdError):
            await service.remove_signers(2, [SIGNER_B, SIGNER_C], caller=ACCOUNT_ADDRESS)
        assert account_state.registry.list() == [SIGNER_A, SIGNER_B, SIGNER_C]

    @pytest.mark.asyncio
    async def test_unknown_signer_rejected(
        self, service: SignerGovernanceService, account_state: AccountState
    ) -> None:
        with pytest.raises(UnknownSignerError):
            await service.remove_signers(1, [SIGNER_E], caller=ACCOUNT_ADDRESS)


class TestReplaceSigner:
    @pytest.mark.asyncio
    async def test_replace_keeps_count_and_threshold(
        self,
        service: SignerGovernanceService,
        account_state: AccountState,
        emitter_stub: AccountEventEmitterStub,
    ) -> None:
        await service.replace_signer(SIGNER_B, SIGNER_D, caller=ACCOUNT_ADDRESS)

        assert account_state.registry.list() == [SIGNER_A, SIGNER_D, SIGNER_C]
        assert account_state.threshold == 2
        assert emitter_stub.events == [
            ConfigurationUpdatedEventPayload(
                new_threshold=2,
                new_signers_count=3,
                added_signers=(SIGNER_D,),
                removed_signers=(SIGNER_B,),
            )
        ]

    @pytest.mark.asyncio
    async def test_replace_with_existing_signer_leaves_registry(
        self, service: SignerGovernanceService, account_state: AccountState
    ) -> None:
        with pytest.raises(DuplicateSignerError):
            await service.replace_signer(SIGNER_A, SIGNER_C, caller=ACCOUNT_ADDRESS)
        assert account_state.registry.list() == [SIGNER_A, SIGNER_B, SIGNER_C]

    @pytest.mark.asyncio
    async def test_replace_unknown_signer(
        self, service: SignerGovernanceService
    ) -> None:
        with pytest.raises(UnknownSignerError):
            await service.replace_signer(SIGNER_E, SIGNER_D, caller=ACCOUNT_ADDRESS)
