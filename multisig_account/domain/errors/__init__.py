"""Domain errors for the multisig account.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from AccountError.
"""

from multisig_account.domain.errors.authentication import (
    AuthenticationFailureError,
    InvalidSignatureError,
    InvalidSignatureLengthError,
    NotASignerError,
    SignersNotSortedError,
)
from multisig_account.domain.errors.dispatch import CallDispatchError
from multisig_account.domain.errors.policy import (
    CapacityExceededError,
    DuplicateSignerError,
    InvalidSignerCountError,
    InvalidSignerError,
    InvalidThresholdError,
    LastSignerInvariantError,
    OnlySelfAllowedError,
    PolicyViolationError,
    UnknownSignerError,
)
from multisig_account.domain.errors.protocol import (
    ForbiddenCallError,
    ForbiddenSelfCallError,
    MalformedCalldataError,
    NonNullCallerError,
    ProtocolViolationError,
    ReentrantCallError,
    UnknownEntrypointError,
    UnsupportedVersionError,
)
from multisig_account.domain.errors.upgrade import (
    InvalidCodeError,
    InvalidImplementationError,
    UnexpectedDataError,
    UpgradeFailureError,
)

__all__: list[str] = [
    # Policy
    "PolicyViolationError",
    "OnlySelfAllowedError",
    "InvalidThresholdError",
    "InvalidSignerCountError",
    "CapacityExceededError",
    "LastSignerInvariantError",
    "DuplicateSignerError",
    "UnknownSignerError",
    "InvalidSignerError",
    # Authentication
    "AuthenticationFailureError",
    "InvalidSignatureLengthError",
    "SignersNotSortedError",
    "NotASignerError",
    "InvalidSignatureError",
    # Protocol
    "ProtocolViolationError",
    "UnsupportedVersionError",
    "ForbiddenCallError",
    "ForbiddenSelfCallError",
    "ReentrantCallError",
    "NonNullCallerError",
    "UnknownEntrypointError",
    "MalformedCalldataError",
    # Upgrade
    "UpgradeFailureError",
    "InvalidImplementationError",
    "UnexpectedDataError",
    "InvalidCodeError",
    # Dispatch
    "CallDispatchError",
]
