"""Configuration change events.

Broadcast on every registry or threshold mutation (and at construction).
Change records are never stored by the account; they are facts for
observers.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Any, ClassVar

CONFIGURATION_UPDATED_EVENT_TYPE = "account.configuration_updated"
"""Event type constant for configuration changes."""


@dataclass(frozen=True)
class ConfigurationUpdatedEventPayload:
    """Payload describing one registry/threshold change.

    Attributes:
        new_threshold: Threshold after the change.
        new_signers_count: Signer count after the change.
        added_signers: Signers added by this change, in order.
        removed_signers: Signers removed by this change, in order.
    """

    event_type: ClassVar[str] = CONFIGURATION_UPDATED_EVENT_TYPE

    new_threshold: int
    new_signers_count: int
    added_signers: tuple[int, ...] = ()
    removed_signers: tuple[int, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for broadcasting.

        Returns:
            Dictionary with all payload fields; signer ids as hex strings.
        """
        return {
            "new_threshold": self.new_threshold,
            "new_signers_count": self.new_signers_count,
            "added_signers": [hex(s) for s in self.added_signers],
            "removed_signers": [hex(s) for s in self.removed_signers],
        }

    def content_hash(self) -> str:
        """SHA-256 over the canonical JSON form."""
        content = json.dumps(self.to_dict(), sort_keys=True).encode("utf-8")
        return hashlib.sha256(content).hexdigest()
