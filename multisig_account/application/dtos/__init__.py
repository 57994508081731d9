"""Data transfer objects for inbound requests."""

from multisig_account.application.dtos.request import (
    CallModel,
    Felt,
    TransactionRequestModel,
)

__all__ = ["CallModel", "Felt", "TransactionRequestModel"]
