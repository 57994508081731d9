"""Domain events (change records) broadcast by the account."""

from __future__ import annotations

from typing import Union

from multisig_account.domain.events.configuration import (
    CONFIGURATION_UPDATED_EVENT_TYPE,
    ConfigurationUpdatedEventPayload,
)
from multisig_account.domain.events.transaction import (
    TRANSACTION_EXECUTED_EVENT_TYPE,
    TransactionExecutedEventPayload,
)
from multisig_account.domain.events.upgrade import (
    ACCOUNT_UPGRADED_EVENT_TYPE,
    AccountUpgradedEventPayload,
)

AccountEvent = Union[
    ConfigurationUpdatedEventPayload,
    TransactionExecutedEventPayload,
    AccountUpgradedEventPayload,
]

__all__ = [
    "ACCOUNT_UPGRADED_EVENT_TYPE",
    "CONFIGURATION_UPDATED_EVENT_TYPE",
    "TRANSACTION_EXECUTED_EVENT_TYPE",
    "AccountEvent",
    "AccountUpgradedEventPayload",
    "ConfigurationUpdatedEventPayload",
    "TransactionExecutedEventPayload",
]
