"""
Pytest configuration and shared fixtures for multisig account tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

import pytest

from multisig_account.bootstrap.account import reset_account_dependencies
from multisig_account.domain.models.account_state import AccountState
from multisig_account.domain.models.signer_registry import SignerRegistry
from multisig_account.infrastructure.stubs import (
    AccountCodeRegistryStub,
    AccountEventEmitterStub,
    CallDispatcherStub,
    SignatureVerifierStub,
)
from tests.helpers import (
    ACCOUNT_ADDRESS,
    ACCOUNT_CODE,
    SIGNER_A,
    SIGNER_B,
    SIGNER_C,
    AccountHarness,
    build_harness,
)


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from multisig_account import __version__

    return __version__


@pytest.fixture(autouse=True)
def _reset_bootstrap_defaults():
    """Keep process-wide bootstrap defaults from leaking between tests."""
    yield
    reset_account_dependencies()


@pytest.fixture
def account_state() -> AccountState:
    """State of a 2-of-3 account over A, B, C."""
    return AccountState(
        address=ACCOUNT_ADDRESS,
        registry=SignerRegistry.from_signers([SIGNER_A, SIGNER_B, SIGNER_C]),
        threshold=2,
        active_code_id=ACCOUNT_CODE,
    )


@pytest.fixture
def verifier_stub() -> SignatureVerifierStub:
    return SignatureVerifierStub()


@pytest.fixture
def dispatcher_stub() -> CallDispatcherStub:
    return CallDispatcherStub()


@pytest.fixture
def code_registry_stub() -> AccountCodeRegistryStub:
    registry = AccountCodeRegistryStub()
    registry.declare_account_code(ACCOUNT_CODE)
    return registry


@pytest.fixture
def emitter_stub() -> AccountEventEmitterStub:
    return AccountEventEmitterStub()


@pytest.fixture
async def harness() -> AccountHarness:
    """A 2-of-3 account over A, B, C wired to in-memory stubs."""
    return await build_harness(threshold=2, signers=[SIGNER_A, SIGNER_B, SIGNER_C])
