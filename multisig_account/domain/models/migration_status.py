"""Two-phase upgrade migration status.

Replaces a nullable "pending implementation" slot with an explicit state:

- IDLE: steady state, nothing staged
- PENDING: a chained upgrade left ``pending_code_id`` to switch to on
  the next post-upgrade callback
- IN_FLIGHT: an upgrade callback is running; a staged pending code id is
  carried through so the callback can consume it
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MigrationPhase(Enum):
    """Phase of the upgrade migration state machine."""

    IDLE = "idle"
    PENDING = "pending"
    IN_FLIGHT = "in_flight"


@dataclass(frozen=True)
class MigrationStatus:
    """Immutable migration status of an account.

    Attributes:
        phase: Current migration phase.
        pending_code_id: Code to switch to on the next callback, if staged.
    """

    phase: MigrationPhase = MigrationPhase.IDLE
    pending_code_id: int | None = None

    def __post_init__(self) -> None:
        if self.phase == MigrationPhase.PENDING and self.pending_code_id is None:
            raise ValueError("PENDING migration requires a pending_code_id")
        if self.phase == MigrationPhase.IDLE and self.pending_code_id is not None:
            raise ValueError("IDLE migration cannot carry a pending_code_id")

    @classmethod
    def idle(cls) -> "MigrationStatus":
        return cls()

    @classmethod
    def pending(cls, code_id: int) -> "MigrationStatus":
        return cls(phase=MigrationPhase.PENDING, pending_code_id=code_id)

    def begin_callback(self) -> "MigrationStatus":
        return MigrationStatus(
            phase=MigrationPhase.IN_FLIGHT, pending_code_id=self.pending_code_id
        )

    def consume_pending(self) -> "MigrationStatus":
        """Drop the staged code id, keeping the current phase if in flight."""
        if self.phase == MigrationPhase.IN_FLIGHT:
            return MigrationStatus(phase=MigrationPhase.IN_FLIGHT)
        return MigrationStatus.idle()

    def settle(self) -> "MigrationStatus":
        """Leave IN_FLIGHT once the callback returns."""
        if self.pending_code_id is not None:
            return MigrationStatus.pending(self.pending_code_id)
        return MigrationStatus.idle()

    @property
    def has_pending(self) -> bool:
        return self.pending_code_id is not None
