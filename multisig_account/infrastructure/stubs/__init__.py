"""Infrastructure stubs for development and testing.

This module provides in-memory implementations of the host primitives
the account depends on.

Available stubs:
- SignatureVerifierStub: Accepts all signatures, with per-signer rejection
- CallDispatcherStub: Routes calls to registered accounts and contracts,
  with failure injection
- AccountCodeRegistryStub: Declared code ids, interface sets and
  entry point overrides for migration callbacks
- AccountEventEmitterStub: Captures emitted events

WARNING: These stubs are NOT for production use.
The production signature verifier is in multisig_account/infrastructure/adapters/.
"""

from multisig_account.infrastructure.stubs.call_dispatcher_stub import (
    CallDispatcherStub,
    Invocation,
)
from multisig_account.infrastructure.stubs.code_registry_stub import (
    AccountCodeRegistryStub,
    DeclaredCode,
)
from multisig_account.infrastructure.stubs.event_emitter_stub import (
    AccountEventEmitterStub,
    EmittedAccountEvent,
)
from multisig_account.infrastructure.stubs.signature_verifier_stub import (
    SignatureVerifierStub,
    VerificationRecord,
)

__all__ = [
    "AccountCodeRegistryStub",
    "AccountEventEmitterStub",
    "CallDispatcherStub",
    "DeclaredCode",
    "EmittedAccountEvent",
    "Invocation",
    "SignatureVerifierStub",
    "VerificationRecord",
]
