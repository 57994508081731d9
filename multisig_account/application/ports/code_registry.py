"""Account code registry port.

Wraps the host primitives the upgrade protocol needs:
- capability introspection on a code id (a library call to
  ``supports_interface`` on the target code)
- code replacement (``set_active_code``), which may fail with
  InvalidCodeError
- running an entry point of a given code against an account's state
  (the post-upgrade migration callback)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from multisig_account.application.services.multisig_account import MultisigAccount


class AccountCodeRegistryProtocol(ABC):
    """Abstract protocol for code introspection and replacement."""

    @abstractmethod
    async def supports_interface(self, code_id: int, interface_id: int) -> bool:
        """Ask the code behind ``code_id`` whether it supports ``interface_id``.

        Returns:
            False for unknown code ids.
        """
        ...

    @abstractmethod
    async def set_active_code(self, address: int, code_id: int) -> None:
        """Switch the code running at ``address`` to ``code_id``.

        Raises:
            InvalidCodeError: If ``code_id`` is not declared.
        """
        ...

    @abstractmethod
    async def get_active_code(self, address: int) -> int | None:
        """Return the code id currently running at ``address``."""
        ...

    @abstractmethod
    async def library_call(
        self,
        code_id: int,
        selector: str,
        account: MultisigAccount,
        args: Sequence[int],
    ) -> tuple[int, ...]:
        """Run entry point ``selector`` of ``code_id`` against ``account``.

        Raises:
            InvalidCodeError: If ``code_id`` is not declared.
            AccountError: Any failure of the called entry point.
        """
        ...
