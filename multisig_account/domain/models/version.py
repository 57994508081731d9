"""Account code version model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Version:
    """Semantic version of the running account code.

    Exposed read-only through ``get_version()`` and handed to the
    post-upgrade migration callback as the previous version.

    Attributes:
        major: Incompatible changes.
        minor: Backward-compatible additions.
        patch: Fixes.
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative int, got {value!r}")

    def to_calldata(self) -> list[int]:
        """Flatten to the three-felt calldata form."""
        return [self.major, self.minor, self.patch]

    @classmethod
    def from_calldata(cls, values: list[int]) -> "Version":
        major, minor, patch = values
        return cls(major=major, minor=minor, patch=patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"
