"""Durable account state and request-scoped snapshots.

All mutable account state lives here: the signer registry, the
threshold, the migration status, the active code id and the reentrancy
flag. The execution pipeline snapshots it on entry and restores it on
any failure so that no partial mutation survives a rejected request.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from multisig_account.domain.models.migration_status import MigrationStatus
from multisig_account.domain.models.signer_registry import SignerRegistry


@dataclass(frozen=True)
class AccountSnapshot:
    """Point-in-time copy of the restorable parts of AccountState."""

    registry: SignerRegistry
    threshold: int
    migration: MigrationStatus
    active_code_id: int


@dataclass
class AccountState:
    """Mutable state of one account.

    Attributes:
        address: The account's own address (self-authorization identity).
        registry: Registered signers.
        threshold: Signatures required per request.
        active_code_id: Code currently running the account.
        migration: Two-phase upgrade status.
        execution_active: Reentrancy flag, set while a request executes.
    """

    address: int
    registry: SignerRegistry
    threshold: int
    active_code_id: int
    migration: MigrationStatus = field(default_factory=MigrationStatus.idle)
    execution_active: bool = False

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            registry=self.registry.copy(),
            threshold=self.threshold,
            migration=self.migration,
            active_code_id=self.active_code_id,
        )

    def restore(self, snapshot: AccountSnapshot) -> None:
        """Roll back to ``snapshot``. The reentrancy flag is not touched."""
        self.registry = snapshot.registry.copy()
        self.threshold = snapshot.threshold
        self.migration = snapshot.migration
        self.active_code_id = snapshot.active_code_id

    def commit_policy(self, registry: SignerRegistry, threshold: int) -> None:
        """Swap in an already-validated registry and threshold together."""
        self.registry = registry
        self.threshold = threshold

    def stage_pending_implementation(self, code_id: int) -> None:
        """Stage the second hop of a chained upgrade."""
        self.migration = MigrationStatus.pending(code_id)
