"""Unit tests for the two-phase upgrade protocol.

Tests self-authorization, introspection of the target code, the
same-transaction migration callback, rollback when the callback fails
and chained upgrades through a staged pending code id.
"""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from multisig_account.application.services.multisig_account import MultisigAccount
from multisig_account.domain.errors.policy import OnlySelfAllowedError
from multisig_account.domain.errors.upgrade import (
    InvalidImplementationError,
    UnexpectedDataError,
)
from multisig_account.domain.events.upgrade import AccountUpgradedEventPayload
from multisig_account.domain.models.migration_status import (
    MigrationPhase,
    MigrationStatus,
)
from multisig_account.domain.models.version import Version
from multisig_account.domain.primitives.account_constants import (
    LEGACY_ACCOUNT_INTERFACE_ID,
)
from tests.helpers import (
    ACCOUNT_CODE,
    NEW_ACCOUNT_CODE,
    NOT_AN_ACCOUNT_CODE,
    SIGNER_A,
    THIRD_ACCOUNT_CODE,
    AccountHarness,
)


@pytest.fixture
async def upgrade_harness(harness: AccountHarness) -> AccountHarness:
    harness.code_registry.declare_account_code(NEW_ACCOUNT_CODE)
    harness.code_registry.declare_account_code(THIRD_ACCOUNT_CODE)
    harness.code_registry.declare(NOT_AN_ACCOUNT_CODE, {LEGACY_ACCOUNT_INTERFACE_ID})
    harness.emitter.reset()
    return harness


async def active_code(harness: AccountHarness) -> int | None:
    return await harness.code_registry.get_active_code(harness.address)


class TestUpgrade:
    """Tests for upgrade()."""

    @pytest.mark.asyncio
    async def test_upgrade_through_validated_request(
        self, upgrade_harness: AccountHarness
    ) -> None:
        request = upgrade_harness.request(
            [upgrade_harness.self_call("upgrade", [NEW_ACCOUNT_CODE, 0])]
        )
        results = await upgrade_harness.submit(request)

        assert await active_code(upgrade_harness) == NEW_ACCOUNT_CODE
        assert upgrade_harness.account.state.active_code_id == NEW_ACCOUNT_CODE
        assert upgrade_harness.account.state.migration == MigrationStatus.idle()
        assert results[0].data == (0,)
        assert AccountUpgradedEventPayload(new_implementation=NEW_ACCOUNT_CODE) in (
            upgrade_harness.emitter.events
        )

    @pytest.mark.asyncio
    async def test_callback_receives_previous_version_and_calldata(
        self, upgrade_harness: AccountHarness
    ) -> None:
        received: list[tuple[int, ...]] = []

        async def migrate(account: MultisigAccount, args: Sequence[int]) -> list[int]:
            received.append(tuple(args))
            return [2, 0x77, 0x88]

        upgrade_harness.code_registry.declare_account_code(
            NEW_ACCOUNT_CODE, overrides={"execute_after_upgrade": migrate}
        )
        result = await upgrade_harness.account.upgrade(
            NEW_ACCOUNT_CODE, [0x5E], caller=upgrade_harness.address
        )

        assert received == [(0, 1, 0, 1, 0x5E)]
        assert result == (0x77, 0x88)

    @pytest.mark.asyncio
    async def test_outsider_rejected(self, upgrade_harness: AccountHarness) -> None:
        with pytest.raises(OnlySelfAllowedError):
            await upgrade_harness.account.upgrade(NEW_ACCOUNT_CODE, [], caller=SIGNER_A)
        assert await active_code(upgrade_harness) == ACCOUNT_CODE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code_id", [NOT_AN_ACCOUNT_CODE, 0xFFFF])
    async def test_code_without_account_interface_rejected(
        self, upgrade_harness: AccountHarness, code_id: int
    ) -> None:
        with pytest.raises(InvalidImplementationError) as exc_info:
            await upgrade_harness.account.upgrade(
                code_id, [], caller=upgrade_harness.address
            )
        assert exc_info.value.code_id == code_id
        assert await active_code(upgrade_harness) == ACCOUNT_CODE
        assert upgrade_harness.code_registry.library_calls == []

    @pytest.mark.asyncio
    async def test_failed_callback_keeps_old_code(
        self, upgrade_harness: AccountHarness
    ) -> None:
        # Non-empty data makes the stock migration entry point fail.
        with pytest.raises(UnexpectedDataError):
            await upgrade_harness.account.upgrade(
                NEW_ACCOUNT_CODE, [1], caller=upgrade_harness.address
            )

        assert await active_code(upgrade_harness) == ACCOUNT_CODE
        assert upgrade_harness.account.state.active_code_id == ACCOUNT_CODE
        assert upgrade_harness.account.state.migration == MigrationStatus.idle()
        assert upgrade_harness.emitter.emitted == []

    @pytest.mark.asyncio
    async def test_failed_callback_inside_request_rolls_back(
        self, upgrade_harness: AccountHarness
    ) -> None:
        async def broken(account: MultisigAccount, args: Sequence[int]) -> list[int]:
            await account.set_threshold(1, caller=account.address)
            raise UnexpectedDataError("migration failed")

        upgrade_harness.code_registry.declare_account_code(
            NEW_ACCOUNT_CODE, overrides={"execute_after_upgrade": broken}
        )
        request = upgrade_harness.request(
            [upgrade_harness.self_call("upgrade", [NEW_ACCOUNT_CODE, 0])]
        )
        with pytest.raises(UnexpectedDataError):
            await upgrade_harness.submit(request)

        assert await active_code(upgrade_harness) == ACCOUNT_CODE
        assert upgrade_harness.account.get_threshold() == 2
        assert upgrade_harness.emitter.emitted == []

    @pytest.mark.asyncio
    async def test_broadcast_failure_does_not_undo_upgrade(
        self, upgrade_harness: AccountHarness
    ) -> None:
        upgrade_harness.emitter.fail_exception = RuntimeError("channel down")

        result = await upgrade_harness.account.upgrade(
            NEW_ACCOUNT_CODE, [], caller=upgrade_harness.address
        )

        assert result == ()
        assert await active_code(upgrade_harness) == NEW_ACCOUNT_CODE
        assert upgrade_harness.account.state.active_code_id == NEW_ACCOUNT_CODE
        assert upgrade_harness.account.state.migration == MigrationStatus.idle()
        assert upgrade_harness.emitter.emitted == []


class TestChainedUpgrade:
    """Tests for staged pending implementations."""

    @pytest.mark.asyncio
    async def test_staged_pending_is_consumed_by_next_upgrade(
        self, upgrade_harness: AccountHarness
    ) -> None:
        upgrade_harness.account.state.stage_pending_implementation(THIRD_ACCOUNT_CODE)

        await upgrade_harness.account.upgrade(
            NEW_ACCOUNT_CODE, [], caller=upgrade_harness.address
        )

        assert await active_code(upgrade_harness) == THIRD_ACCOUNT_CODE
        assert upgrade_harness.account.state.active_code_id == THIRD_ACCOUNT_CODE
        assert upgrade_harness.account.state.migration == MigrationStatus.idle()
        assert upgrade_harness.emitter.events_of_type(AccountUpgradedEventPayload) == [
            AccountUpgradedEventPayload(new_implementation=NEW_ACCOUNT_CODE),
            AccountUpgradedEventPayload(new_implementation=THIRD_ACCOUNT_CODE),
        ]

    @pytest.mark.asyncio
    async def test_migration_can_stage_a_second_hop(
        self, upgrade_harness: AccountHarness
    ) -> None:
        async def stage_next(account: MultisigAccount, args: Sequence[int]) -> list[int]:
            account.state.stage_pending_implementation(THIRD_ACCOUNT_CODE)
            return [0]

        upgrade_harness.code_registry.declare_account_code(
            NEW_ACCOUNT_CODE, overrides={"execute_after_upgrade": stage_next}
        )
        await upgrade_harness.account.upgrade(
            NEW_ACCOUNT_CODE, [], caller=upgrade_harness.address
        )

        status = upgrade_harness.account.state.migration
        assert status.phase == MigrationPhase.PENDING
        assert status.pending_code_id == THIRD_ACCOUNT_CODE
        assert await active_code(upgrade_harness) == NEW_ACCOUNT_CODE

        upgrade_harness.code_registry.declare_account_code(0xC0DE4)
        await upgrade_harness.account.upgrade(0xC0DE4, [], caller=upgrade_harness.address)

        assert await active_code(upgrade_harness) == THIRD_ACCOUNT_CODE
        assert upgrade_harness.account.state.migration == MigrationStatus.idle()

    @pytest.mark.asyncio
    async def test_failed_upgrade_keeps_staged_pending(
        self, upgrade_harness: AccountHarness
    ) -> None:
        upgrade_harness.account.state.stage_pending_implementation(THIRD_ACCOUNT_CODE)

        with pytest.raises(UnexpectedDataError):
            await upgrade_harness.account.upgrade(
                NEW_ACCOUNT_CODE, [1], caller=upgrade_harness.address
            )

        assert upgrade_harness.account.state.migration == MigrationStatus.pending(
            THIRD_ACCOUNT_CODE
        )
        assert await active_code(upgrade_harness) == ACCOUNT_CODE


class TestExecuteAfterUpgrade:
    """Tests for the migration entry point itself."""

    @pytest.mark.asyncio
    async def test_noop_without_pending(self, upgrade_harness: AccountHarness) -> None:
        result = await upgrade_harness.account.execute_after_upgrade(
            Version(0, 1, 0), [], caller=upgrade_harness.address
        )
        assert result == ()
        assert await active_code(upgrade_harness) == ACCOUNT_CODE

    @pytest.mark.asyncio
    async def test_rejects_data(self, upgrade_harness: AccountHarness) -> None:
        with pytest.raises(UnexpectedDataError):
            await upgrade_harness.account.execute_after_upgrade(
                Version(0, 1, 0), [1, 2], caller=upgrade_harness.address
            )

    @pytest.mark.asyncio
    async def test_outsider_rejected(self, upgrade_harness: AccountHarness) -> None:
        with pytest.raises(OnlySelfAllowedError):
            await upgrade_harness.account.execute_after_upgrade(
                Version(0, 1, 0), [], caller=SIGNER_A
            )
