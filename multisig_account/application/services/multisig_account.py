"""Threshold multisig account.

Composes the signer registry, the aggregate signature verifier, the
governance mutators, the execution pipeline and the upgrade protocol
around one AccountState.

Entry points come in two forms:
- typed async methods (``set_threshold(..., caller=...)``) used by
  in-process callers and tests
- ``handle_call(selector, args, caller=...)``, the flat-calldata router
  the host dispatcher uses when a dispatched call targets this account

Mutating entry points require ``caller == address``: the only way to
reach them is a validated request whose call list targets the account.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence

from structlog import get_logger

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
from multisig_account.application.services.event_journal import EventJournal
from multisig_account.application.services.execution_pipeline_service import (
    ExecutionPipelineService,
)
from multisig_account.application.services.signature_aggregation_service import (
    SignatureAggregationService,
)
from multisig_account.application.services.signer_governance_service import (
    SignerGovernanceService,
)
from multisig_account.application.services.upgrade_service import UpgradeService
from multisig_account.config.account_config import DEFAULT_ACCOUNT_CONFIG, AccountConfig
from multisig_account.domain.errors.protocol import UnknownEntrypointError
from multisig_account.domain.events.configuration import (
    ConfigurationUpdatedEventPayload,
)
from multisig_account.domain.models.account_state import AccountState
from multisig_account.domain.models.calldata import CalldataReader, encode_array
from multisig_account.domain.models.request import AccountRequest, CallResult
from multisig_account.domain.models.signer_registry import SignerRegistry
from multisig_account.domain.models.signer_signature import parse_signature_list
from multisig_account.domain.models.version import Version
from multisig_account.domain.primitives.account_constants import (
    ACCOUNT_VERSION,
    SUPPORTED_INTERFACE_IDS,
    VALIDATED,
)
from multisig_account.domain.primitives.threshold_policy import (
    assert_valid_threshold_and_signers_count,
)

logger = get_logger()

EntrypointHandler = Callable[[CalldataReader, int], Awaitable[list[int]]]


class MultisigAccount:
    """An account controlled by ``threshold`` of its registered signers.

    Build with ``MultisigAccount.create`` (or ``bootstrap.build_account``),
    which runs the construction checks and emits the initial change record.
    """

    def __init__(
        self,
        state: AccountState,
        *,
        aggregation: SignatureAggregationService,
        governance: SignerGovernanceService,
        upgrades: UpgradeService,
        pipeline: ExecutionPipelineService,
        config: AccountConfig,
    ) -> None:
        self._state = state
        self._aggregation = aggregation
        self._governance = governance
        self._upgrades = upgrades
        self._pipeline = pipeline
        self._config = config
        self._entrypoints: dict[str, EntrypointHandler] = {
            "get_threshold": self._call_get_threshold,
            "get_signers": self._call_get_signers,
            "is_signer": self._call_is_signer,
            "get_version": self._call_get_version,
            "get_name": self._call_get_name,
            "supports_interface": self._call_supports_interface,
            "is_valid_signature": self._call_is_valid_signature,
            "set_threshold": self._call_set_threshold,
            "add_signers": self._call_add_signers,
            "remove_signers": self._call_remove_signers,
            "replace_signer": self._call_replace_signer,
            "upgrade": self._call_upgrade,
            "execute_after_upgrade": self._call_execute_after_upgrade,
        }

    @classmethod
    async def create(
        cls,
        *,
        address: int,
        code_id: int,
        threshold: int,
        signers: Sequence[int],
        verifier: SignatureVerifierProtocol,
        dispatcher: CallDispatcherProtocol,
        code_registry: AccountCodeRegistryProtocol,
        emitter: AccountEventEmitterProtocol,
        config: AccountConfig = DEFAULT_ACCOUNT_CONFIG,
    ) -> "MultisigAccount":
        """Construct an account.

        Args:
            address: The account's own address; must be nonzero.
            code_id: Code the account is deployed with.
            threshold: Initial threshold.
            signers: Initial signers, in order.
            verifier: Single-signature primitive.
            dispatcher: Host call primitive.
            code_registry: Host code primitives.
            emitter: Change-record broadcast primitive.
            config: Runtime configuration.

        Returns:
            The account, with one ConfigurationUpdated recorded listing
            every initial signer as added.

        Raises:
            ValueError: If ``address`` is zero.
            InvalidSignerError, DuplicateSignerError, CapacityExceededError:
                From the registry.
            InvalidThresholdError, InvalidSignerCountError: From the policy.
            InvalidCodeError: If the host refuses ``code_id``.
        """
        if address == 0:
            raise ValueError("account address must be nonzero")

        log = logger.bind(operation="create_account", account=hex(address))
        registry = SignerRegistry.from_signers(signers)
        assert_valid_threshold_and_signers_count(threshold, registry.count)

        state = AccountState(
            address=address,
            registry=registry,
            threshold=threshold,
            active_code_id=code_id,
        )
        journal = EventJournal(emitter, address)
        aggregation = SignatureAggregationService(verifier)
        account = cls(
            state,
            aggregation=aggregation,
            governance=SignerGovernanceService(state, journal),
            upgrades=UpgradeService(state, code_registry, journal),
            pipeline=ExecutionPipelineService(
                state, aggregation, dispatcher, code_registry, journal, config
            ),
            config=config,
        )

        await code_registry.set_active_code(address, code_id)
        await journal.record(
            ConfigurationUpdatedEventPayload(
                new_threshold=threshold,
                new_signers_count=registry.count,
                added_signers=tuple(registry),
            )
        )
        log.info(
            "account_created",
            threshold=threshold,
            signers_count=registry.count,
            code_id=hex(code_id),
        )
        return account

    # ------------------------------------------------------------- accessors

    @property
    def address(self) -> int:
        return self._state.address

    @property
    def state(self) -> AccountState:
        return self._state

    @property
    def is_executing(self) -> bool:
        return self._pipeline.guard.is_held

    # ---------------------------------------------------------------- reads

    def get_threshold(self) -> int:
        return self._state.threshold

    def get_signers(self) -> list[int]:
        return self._state.registry.list()

    def is_signer(self, signer: int) -> bool:
        return self._state.registry.is_signer(signer)

    def get_version(self) -> Version:
        return ACCOUNT_VERSION

    def get_name(self) -> int:
        """Account name as a big-endian short string."""
        return self._config.encoded_name

    def supports_interface(self, interface_id: int) -> bool:
        return interface_id in SUPPORTED_INTERFACE_IDS

    async def is_valid_signature(self, message_hash: int, signature: Sequence[int]) -> int:
        """Off-chain signature check against the current signers and threshold.

        Returns:
            VALIDATED if the aggregate signature verifies, 0 if a signature
            does not.

        Raises:
            InvalidSignatureLengthError, SignersNotSortedError, NotASignerError:
                On a structurally invalid aggregate.
        """
        signatures = parse_signature_list(signature)
        valid = await self._aggregation.verify_aggregate(
            message_hash, signatures, self._state.registry, self._state.threshold
        )
        return VALIDATED if valid else 0

    # ------------------------------------------------------------ pipeline

    async def validate(self, request: AccountRequest, *, caller: int) -> int:
        return await self._pipeline.validate(request, caller=caller)

    async def validate_declare(
        self, request: AccountRequest, code_id: int, *, caller: int
    ) -> int:
        return await self._pipeline.validate_declare(request, code_id, caller=caller)

    async def validate_deploy(
        self,
        request: AccountRequest,
        code_id: int,
        salt: int,
        threshold: int,
        signers: Sequence[int],
        *,
        caller: int,
    ) -> int:
        return await self._pipeline.validate_bootstrap(
            request, code_id, salt, threshold, signers, caller=caller
        )

    async def execute(self, request: AccountRequest, *, caller: int) -> list[CallResult]:
        return await self._pipeline.execute(request, caller=caller)

    # ---------------------------------------------------------- governance

    async def set_threshold(self, new_threshold: int, *, caller: int) -> None:
        await self._governance.set_threshold(new_threshold, caller=caller)

    async def add_signers(
        self, new_threshold: int, signers_to_add: Sequence[int], *, caller: int
    ) -> None:
        await self._governance.add_signers(new_threshold, list(signers_to_add), caller=caller)

    async def remove_signers(
        self, new_threshold: int, signers_to_remove: Sequence[int], *, caller: int
    ) -> None:
        await self._governance.remove_signers(
            new_threshold, list(signers_to_remove), caller=caller
        )

    async def replace_signer(
        self, signer_to_remove: int, signer_to_add: int, *, caller: int
    ) -> None:
        await self._governance.replace_signer(signer_to_remove, signer_to_add, caller=caller)

    # -------------------------------------------------------------- upgrade

    async def upgrade(
        self, new_code_id: int, calldata: Sequence[int], *, caller: int
    ) -> tuple[int, ...]:
        return await self._upgrades.upgrade(self, new_code_id, calldata, caller=caller)

    async def execute_after_upgrade(
        self, previous_version: Version, data: Sequence[int], *, caller: int
    ) -> tuple[int, ...]:
        return await self._upgrades.execute_after_upgrade(
            previous_version, data, caller=caller
        )

    # ------------------------------------------------------- calldata router

    async def handle_call(
        self, selector: str, args: Sequence[int], *, caller: int
    ) -> tuple[int, ...]:
        """Decode ``args`` for entry point ``selector`` and run it.

        Returns:
            Flat return data.

        Raises:
            UnknownEntrypointError: If ``selector`` is not an entry point.
            MalformedCalldataError: If ``args`` does not decode.
            AccountError: Any failure of the entry point itself.
        """
        handler = self._entrypoints.get(selector)
        if handler is None:
            logger.warning(
                "unknown_entrypoint", account=hex(self.address), selector=selector
            )
            raise UnknownEntrypointError(selector)
        reader = CalldataReader(args)
        result = await handler(reader, caller)
        return tuple(result)

    async def _call_get_threshold(self, reader: CalldataReader, caller: int) -> list[int]:
        reader.finish()
        return [self.get_threshold()]

    async def _call_get_signers(self, reader: CalldataReader, caller: int) -> list[int]:
        reader.finish()
        return encode_array(self.get_signers())

    async def _call_is_signer(self, reader: CalldataReader, caller: int) -> list[int]:
        signer = reader.read_felt()
        reader.finish()
        return [int(self.is_signer(signer))]

    async def _call_get_version(self, reader: CalldataReader, caller: int) -> list[int]:
        reader.finish()
        return self.get_version().to_calldata()

    async def _call_get_name(self, reader: CalldataReader, caller: int) -> list[int]:
        reader.finish()
        return [self.get_name()]

    async def _call_supports_interface(
        self, reader: CalldataReader, caller: int
    ) -> list[int]:
        interface_id = reader.read_felt()
        reader.finish()
        return [int(self.supports_interface(interface_id))]

    async def _call_is_valid_signature(
        self, reader: CalldataReader, caller: int
    ) -> list[int]:
        message_hash = reader.read_felt()
        signature = reader.read_array()
        reader.finish()
        return [await self.is_valid_signature(message_hash, signature)]

    async def _call_set_threshold(self, reader: CalldataReader, caller: int) -> list[int]:
        new_threshold = reader.read_felt()
        reader.finish()
        await self.set_threshold(new_threshold, caller=caller)
        return []

    async def _call_add_signers(self, reader: CalldataReader, caller: int) -> list[int]:
        new_threshold = reader.read_felt()
        signers = reader.read_array()
        reader.finish()
        await self.add_signers(new_threshold, signers, caller=caller)
        return []

    async def _call_remove_signers(self, reader: CalldataReader, caller: int) -> list[int]:
        new_threshold = reader.read_felt()
        signers = reader.read_array()
        reader.finish()
        await self.remove_signers(new_threshold, signers, caller=caller)
        return []

    async def _call_replace_signer(self, reader: CalldataReader, caller: int) -> list[int]:
        signer_to_remove = reader.read_felt()
        signer_to_add = reader.read_felt()
        reader.finish()
        await self.replace_signer(signer_to_remove, signer_to_add, caller=caller)
        return []

    async def _call_upgrade(self, reader: CalldataReader, caller: int) -> list[int]:
        new_code_id = reader.read_felt()
        calldata = reader.read_array()
        reader.finish()
        return encode_array(await self.upgrade(new_code_id, calldata, caller=caller))

    async def _call_execute_after_upgrade(
        self, reader: CalldataReader, caller: int
    ) -> list[int]:
        previous_version = Version.from_calldata(
            [reader.read_felt(), reader.read_felt(), reader.read_felt()]
        )
        data = reader.read_array()
        reader.finish()
        return encode_array(
            await self.execute_after_upgrade(previous_version, data, caller=caller)
        )
