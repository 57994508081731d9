"""Ports (external collaborator interfaces) of the multisig account."""

from multisig_account.application.ports.call_dispatcher import CallDispatcherProtocol
from multisig_account.application.ports.code_registry import (
    AccountCodeRegistryProtocol,
)
from multisig_account.application.ports.event_emitter import (
    AccountEventEmitterProtocol,
)
from multisig_account.application.ports.signature_verifier import (
    SignatureVerifierProtocol,
)

__all__ = [
    "AccountCodeRegistryProtocol",
    "AccountEventEmitterProtocol",
    "CallDispatcherProtocol",
    "SignatureVerifierProtocol",
]
