"""Signer registry - ordered set of approver ids.

The registry is a singly linked set keyed by signer id: each member
points at the next member in insertion order, a sentinel head (0) points
at the first member, and the tail is cached. Membership, append and
relink are O(1); iteration yields insertion order.

Invariants:
- No duplicates, zero is never a member
- 0 <= len(registry) <= MAX_SIGNERS (the >= 1 floor is enforced on
  removal and by the account-level threshold policy)
- Every mutator validates the whole batch before touching state; a
  failed call leaves the registry unchanged

Tail hints:
Mutators accept ``last_hint``, the caller's belief of the current tail.
It is purely a performance hint: an accurate hint skips the tail lookup,
a stale one falls back to a walk of the list. Results never depend on it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from multisig_account.domain.errors.policy import (
    CapacityExceededError,
    DuplicateSignerError,
    InvalidSignerError,
    LastSignerInvariantError,
    UnknownSignerError,
)
from multisig_account.domain.primitives.account_constants import (
    MAX_SIGNERS,
    NULL_SIGNER,
    is_valid_signer_id,
)

_HEAD = NULL_SIGNER


class SignerRegistry:
    """Insertion-ordered set of signer ids with hinted append/removal."""

    __slots__ = ("_next", "_last")

    def __init__(self) -> None:
        # signer -> next signer; the sentinel head maps to the first member.
        self._next: dict[int, int] = {_HEAD: NULL_SIGNER}
        self._last: int = NULL_SIGNER

    @classmethod
    def from_signers(cls, signers: Iterable[int]) -> "SignerRegistry":
        """Build a registry holding ``signers`` in the given order.

        Raises:
            InvalidSignerError: If any id is zero or out of range.
            DuplicateSignerError: If an id is repeated.
            CapacityExceededError: If more than MAX_SIGNERS ids are given.
        """
        registry = cls()
        registry.add(list(signers), last_hint=NULL_SIGNER)
        return registry

    # ------------------------------------------------------------------ reads

    def is_signer(self, signer: int) -> bool:
        return signer != NULL_SIGNER and signer in self._next

    def __contains__(self, signer: object) -> bool:
        return isinstance(signer, int) and self.is_signer(signer)

    @property
    def count(self) -> int:
        return len(self._next) - 1

    def __len__(self) -> int:
        return self.count

    @property
    def last(self) -> int:
        """Current tail signer, or 0 when empty."""
        return self._last

    def __iter__(self) -> Iterator[int]:
        current = self._next[_HEAD]
        while current != NULL_SIGNER:
            yield current
            current = self._next[current]

    def list(self) -> list[int]:
        """Signers in insertion order."""
        return list(iter(self))

    def copy(self) -> "SignerRegistry":
        clone = SignerRegistry()
        clone._next = dict(self._next)
        clone._last = self._last
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SignerRegistry):
            return NotImplemented
        return self.list() == other.list()

    def __repr__(self) -> str:
        return f"SignerRegistry({[hex(s) for s in self]})"

    # -------------------------------------------------------------- mutations

    def add(self, signers: list[int], last_hint: int) -> None:
        """Append ``signers`` after the current tail.

        Args:
            signers: Ids to append, in order.
            last_hint: Caller's belief of the current tail.

        Raises:
            InvalidSignerError: If any id is zero or out of range.
            DuplicateSignerError: If any id is present or repeated in the batch.
            CapacityExceededError: If the result would exceed MAX_SIGNERS.
        """
        seen: set[int] = set()
        for signer in signers:
            if not is_valid_signer_id(signer):
                raise InvalidSignerError(signer)
            if signer in seen or self.is_signer(signer):
                raise DuplicateSignerError(signer)
            seen.add(signer)

        new_count = self.count + len(signers)
        if new_count > MAX_SIGNERS:
            raise CapacityExceededError(new_count, MAX_SIGNERS)

        tail = self._resolve_tail(last_hint)
        for signer in signers:
            self._next[tail] = signer
            self._next[signer] = NULL_SIGNER
            tail = signer
        self._last = tail

    def remove(self, signers: list[int], last_hint: int) -> None:
        """Unlink ``signers`` from the registry.

        Args:
            signers: Ids to remove.
            last_hint: Caller's belief of the current tail.

        Raises:
            UnknownSignerError: If any id is absent or repeated in the batch.
            LastSignerInvariantError: If no signer would remain.
        """
        seen: set[int] = set()
        for signer in signers:
            if signer in seen or not self.is_signer(signer):
                raise UnknownSignerError(signer)
            seen.add(signer)

        if self.count - len(signers) < 1:
            raise LastSignerInvariantError()

        tail = self._resolve_tail(last_hint)
        for signer in signers:
            previous = self._find_previous(signer)
            self._next[previous] = self._next.pop(signer)
            if signer == tail:
                tail = previous
        self._last = tail

    def replace(self, old_signer: int, new_signer: int, last_hint: int) -> None:
        """Swap ``old_signer`` for ``new_signer`` in place.

        A single relink, not remove followed by add: the registry is never
        observed empty or holding both ids, and its size is unchanged.

        Raises:
            UnknownSignerError: If ``old_signer`` is absent.
            InvalidSignerError: If ``new_signer`` is zero or out of range.
            DuplicateSignerError: If ``new_signer`` is already present.
        """
        if not self.is_signer(old_signer):
            raise UnknownSignerError(old_signer)
        if not is_valid_signer_id(new_signer):
            raise InvalidSignerError(new_signer)
        if self.is_signer(new_signer):
            raise DuplicateSignerError(new_signer)

        tail = self._resolve_tail(last_hint)
        previous = self._find_previous(old_signer)
        following = self._next.pop(old_signer)
        self._next[previous] = new_signer
        self._next[new_signer] = following
        self._last = new_signer if old_signer == tail else tail

    # ---------------------------------------------------------------- helpers

    def _resolve_tail(self, last_hint: int) -> int:
        """Return the tail, trusting ``last_hint`` only if it checks out."""
        if last_hint in self._next and self._next[last_hint] == NULL_SIGNER:
            return last_hint
        if self._last in self._next and self._next[self._last] == NULL_SIGNER:
            return self._last
        tail = _HEAD
        while self._next[tail] != NULL_SIGNER:
            tail = self._next[tail]
        return tail

    def _find_previous(self, signer: int) -> int:
        current = _HEAD
        while self._next[current] != signer:
            current = self._next[current]
        return current
