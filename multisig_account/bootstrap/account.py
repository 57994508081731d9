"""Bootstrap wiring for account dependencies.

``build_account`` assembles a MultisigAccount against host primitives.
Any primitive not supplied falls back to the process-wide default:
- signature verifier: Secp256k1SignatureVerifier
- call dispatcher, code registry, event emitter: in-memory stubs

With the in-memory code registry the deployment code id is declared
automatically, and the account is registered with the in-memory
dispatcher so calls targeting it are routed to its entry points.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from multisig_account.application.services.multisig_account import MultisigAccount
from multisig_account.config.account_config import AccountConfig
from multisig_account.infrastructure.adapters.secp256k1 import (
    Secp256k1SignatureVerifier,
)
from multisig_account.infrastructure.observability import get_logger_for_service
from multisig_account.infrastructure.stubs.call_dispatcher_stub import CallDispatcherStub
from multisig_account.infrastructure.stubs.code_registry_stub import (
    AccountCodeRegistryStub,
)
from multisig_account.infrastructure.stubs.event_emitter_stub import (
    AccountEventEmitterStub,
)

if TYPE_CHECKING:
    from multisig_account.application.ports.call_dispatcher import (
        CallDispatcherProtocol,
    )
    from multisig_account.application.ports.code_registry import (
        AccountCodeRegistryProtocol,
    )
    from multisig_account.application.ports.event_emitter import (
        AccountEventEmitterProtocol,
    )
    from multisig_account.application.ports.signature_verifier import (
        SignatureVerifierProtocol,
    )


_signature_verifier: SignatureVerifierProtocol | None = None
_call_dispatcher: CallDispatcherProtocol | None = None
_code_registry: AccountCodeRegistryProtocol | None = None
_event_emitter: AccountEventEmitterProtocol | None = None


def get_signature_verifier() -> SignatureVerifierProtocol:
    """Get the signature verifier instance.

    Returns:
        SignatureVerifierProtocol implementation.
    """
    global _signature_verifier
    if _signature_verifier is None:
        _signature_verifier = Secp256k1SignatureVerifier()
    return _signature_verifier


def set_signature_verifier(verifier: SignatureVerifierProtocol) -> None:
    """Set the signature verifier instance.

    Args:
        verifier: SignatureVerifierProtocol implementation.
    """
    global _signature_verifier
    _signature_verifier = verifier


def get_call_dispatcher() -> CallDispatcherProtocol:
    global _call_dispatcher
    if _call_dispatcher is None:
        _call_dispatcher = CallDispatcherStub()
    return _call_dispatcher


def set_call_dispatcher(dispatcher: CallDispatcherProtocol) -> None:
    global _call_dispatcher
    _call_dispatcher = dispatcher


def get_code_registry() -> AccountCodeRegistryProtocol:
    global _code_registry
    if _code_registry is None:
        _code_registry = AccountCodeRegistryStub()
    return _code_registry


def set_code_registry(registry: AccountCodeRegistryProtocol) -> None:
    global _code_registry
    _code_registry = registry


def get_event_emitter() -> AccountEventEmitterProtocol:
    global _event_emitter
    if _event_emitter is None:
        _event_emitter = AccountEventEmitterStub()
    return _event_emitter


def set_event_emitter(emitter: AccountEventEmitterProtocol) -> None:
    global _event_emitter
    _event_emitter = emitter


def reset_account_dependencies() -> None:
    """Drop every process-wide default (for tests)."""
    global _signature_verifier, _call_dispatcher, _code_registry, _event_emitter
    _signature_verifier = None
    _call_dispatcher = None
    _code_registry = None
    _event_emitter = None


async def build_account(
    *,
    address: int,
    code_id: int,
    threshold: int,
    signers: Sequence[int],
    verifier: SignatureVerifierProtocol | None = None,
    dispatcher: CallDispatcherProtocol | None = None,
    code_registry: AccountCodeRegistryProtocol | None = None,
    emitter: AccountEventEmitterProtocol | None = None,
    config: AccountConfig | None = None,
) -> MultisigAccount:
    """Build and construct a MultisigAccount.

    Args:
        address: The account's own address.
        code_id: Code the account is deployed with.
        threshold: Initial threshold.
        signers: Initial signers.
        verifier: Signature primitive; defaults to get_signature_verifier().
        dispatcher: Call primitive; defaults to get_call_dispatcher().
        code_registry: Code primitives; defaults to get_code_registry().
        emitter: Broadcast primitive; defaults to get_event_emitter().
        config: Runtime config; defaults to AccountConfig.from_environment().

    Returns:
        The constructed account.
    """
    log = get_logger_for_service("build_account", component="bootstrap")
    config = config or AccountConfig.from_environment()
    dispatcher = dispatcher or get_call_dispatcher()
    code_registry = code_registry or get_code_registry()

    if isinstance(code_registry, AccountCodeRegistryStub) and not code_registry.is_declared(
        code_id
    ):
        code_registry.declare_account_code(code_id)

    account = await MultisigAccount.create(
        address=address,
        code_id=code_id,
        threshold=threshold,
        signers=signers,
        verifier=verifier or get_signature_verifier(),
        dispatcher=dispatcher,
        code_registry=code_registry,
        emitter=emitter or get_event_emitter(),
        config=config,
    )

    if isinstance(dispatcher, CallDispatcherStub):
        dispatcher.register_account(account)

    log.debug("account_wired", account=hex(address), config_name=config.name)
    return account
