"""Call dispatch port.

The host's call primitive: ``invoke(target, selector, args) -> results``.
It may fail; failures propagate unchanged and fail the whole request.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from multisig_account.domain.models.request import Call


class CallDispatcherProtocol(ABC):
    """Abstract protocol for dispatching calls to contracts."""

    @abstractmethod
    async def invoke(self, call: Call, *, caller: int) -> tuple[int, ...]:
        """Dispatch one call.

        Args:
            call: Target, selector and calldata.
            caller: Address the call is made from (the account).

        Returns:
            Flat return data of the call.

        Raises:
            CallDispatchError: If the call fails downstream.
            AccountError: Any error raised by the called contract.
        """
        ...
