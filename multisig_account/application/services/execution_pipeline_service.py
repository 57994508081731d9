"""Execution pipeline service.

Per-request state machine: Received -> Validated -> Executed, or
Rejected at either gate.

validate:
- Called by the protocol only (caller 0)
- A single call to the account itself may not use the reserved
  migration selector (ForbiddenCall)
- A batch of more than one call may not target the account at all
  (ForbiddenSelfCall); a single self-call stays allowed for governance
  and upgrades
- The aggregate signature must satisfy the current threshold

execute:
- Reentrancy is checked before anything else
- Called by the protocol only, declared version must be supported
- Calls are dispatched in order under the reentrancy guard; any failure
  fails the whole request and restores the account state exactly
- Change records of a failed request are dropped; on success they are
  broadcast after the commit point, followed by the execution record

The host guarantees that execute only runs for a request validate has
accepted; this is not re-checked here.
"""

from __future__ import annotations

from collections.abc import Sequence

from structlog import get_logger
from structlog.contextvars import bound_contextvars

from multisig_account.application.ports.call_dispatcher import CallDispatcherProtocol
from multisig_account.application.ports.code_registry import (
    AccountCodeRegistryProtocol,
)
from multisig_account.application.services.event_journal import EventJournal
from multisig_account.application.services.reentrancy_guard import ReentrancyGuard
from multisig_account.application.services.signature_aggregation_service import (
    SignatureAggregationService,
)
from multisig_account.config.account_config import AccountConfig
from multisig_account.domain.errors.protocol import (
    ForbiddenCallError,
    ForbiddenSelfCallError,
    NonNullCallerError,
    UnsupportedVersionError,
)
from multisig_account.domain.events.transaction import TransactionExecutedEventPayload
from multisig_account.domain.models.account_state import AccountSnapshot, AccountState
from multisig_account.domain.models.request import AccountRequest, Call, CallResult
from multisig_account.domain.primitives.account_constants import (
    EXECUTE_AFTER_UPGRADE_SELECTOR,
    PROTOCOL_CALLER,
    VALIDATED,
    is_supported_tx_version,
)

logger = get_logger()


class ExecutionPipelineService:
    """Validates and executes requests against one account.

    Attributes:
        _state: The account state.
        _aggregation: Aggregate signature verifier.
        _dispatcher: Host call primitive.
        _code_registry: Host code primitive, used to resync on rollback.
        _journal: Change-record journal.
        _guard: Reentrancy guard over ``_state``.
    """

    def __init__(
        self,
        state: AccountState,
        aggregation: SignatureAggregationService,
        dispatcher: CallDispatcherProtocol,
        code_registry: AccountCodeRegistryProtocol,
        journal: EventJournal,
        config: AccountConfig,
    ) -> None:
        self._state = state
        self._aggregation = aggregation
        self._dispatcher = dispatcher
        self._code_registry = code_registry
        self._journal = journal
        self._config = config
        self._guard = ReentrancyGuard(state)

    @property
    def guard(self) -> ReentrancyGuard:
        return self._guard

    async def validate(self, request: AccountRequest, *, caller: int) -> int:
        """Pre-check a request: call shape, then aggregate signature.

        Args:
            request: The incoming request.
            caller: Invoker; must be the protocol.

        Returns:
            VALIDATED.

        Raises:
            NonNullCallerError: If invoked by anything but the protocol.
            ForbiddenCallError: If a single self-call uses the migration selector.
            ForbiddenSelfCallError: If a batch of several calls targets the account.
            AuthenticationFailureError: Any aggregate signature failure.
        """
        with bound_contextvars(correlation_id=hex(request.transaction_hash)):
            log = logger.bind(operation="validate", account=hex(self._state.address))
            self._assert_protocol_caller(caller)
            self._assert_call_shape(request.calls)
            await self._aggregation.assert_aggregate(
                request.transaction_hash,
                request.signatures,
                self._state.registry,
                self._state.threshold,
            )
            log.info("request_validated", calls=len(request.calls))
            return VALIDATED

    async def validate_declare(
        self, request: AccountRequest, code_id: int, *, caller: int
    ) -> int:
        """Authorize a code declaration with the full aggregate signature."""
        with bound_contextvars(correlation_id=hex(request.transaction_hash)):
            self._assert_protocol_caller(caller)
            await self._aggregation.assert_aggregate(
                request.transaction_hash,
                request.signatures,
                self._state.registry,
                self._state.threshold,
            )
            logger.info(
                "declare_validated",
                account=hex(self._state.address),
                code_id=hex(code_id),
            )
            return VALIDATED

    async def validate_bootstrap(
        self,
        request: AccountRequest,
        code_id: int,
        salt: int,
        threshold: int,
        signers: Sequence[int],
        *,
        caller: int,
    ) -> int:
        """Authorize a self-funded deployment with a single signature.

        Checks the request's one signature against the signer list carried
        inline by the deployment itself, not against stored state.

        Raises:
            NonNullCallerError: If invoked by anything but the protocol.
            InvalidSignatureLengthError, NotASignerError, InvalidSignatureError:
                From the bootstrap verifier.
        """
        with bound_contextvars(correlation_id=hex(request.transaction_hash)):
            self._assert_protocol_caller(caller)
            await self._aggregation.assert_single_signer_signature(
                request.transaction_hash, request.signatures, list(signers)
            )
            logger.info(
                "deployment_validated",
                account=hex(self._state.address),
                code_id=hex(code_id),
                salt=hex(salt),
                threshold=threshold,
                signers_count=len(signers),
            )
            return VALIDATED

    async def execute(self, request: AccountRequest, *, caller: int) -> list[CallResult]:
        """Dispatch every call of an already validated request, all or nothing.

        Args:
            request: The validated request.
            caller: Invoker; must be the protocol.

        Returns:
            One result bundle per call, in order.

        Raises:
            ReentrantCallError: If an execution is already in flight.
            NonNullCallerError: If invoked by anything but the protocol.
            UnsupportedVersionError: If the declared version is not accepted.
            AccountError: Any failure of a dispatched call, unchanged.
        """
        with bound_contextvars(correlation_id=hex(request.transaction_hash)):
            log = logger.bind(operation="execute", account=hex(self._state.address))
            self._guard.check()
            self._assert_protocol_caller(caller)
            self._assert_supported_version(request.version)

            with self._guard.hold():
                snapshot = self._state.snapshot()
                async with self._journal.transaction():
                    try:
                        results = await self._dispatch_all(request.calls)
                        await self._journal.record(
                            TransactionExecutedEventPayload(
                                transaction_hash=request.transaction_hash,
                                results=tuple(results),
                            )
                        )
                    except Exception as exc:
                        log.warning(
                            "execution_reverted",
                            error=getattr(exc, "code", type(exc).__name__),
                        )
                        await self._rollback(snapshot)
                        raise

            log.info("request_executed", calls=len(results))
            return results

    async def _dispatch_all(self, calls: Sequence[Call]) -> list[CallResult]:
        results: list[CallResult] = []
        for call in calls:
            data = await self._dispatcher.invoke(call, caller=self._state.address)
            results.append(
                CallResult(target=call.target, selector=call.selector, data=tuple(data))
            )
        return results

    async def _rollback(self, snapshot: AccountSnapshot) -> None:
        self._state.restore(snapshot)
        active = await self._code_registry.get_active_code(self._state.address)
        if active != snapshot.active_code_id:
            await self._code_registry.set_active_code(
                self._state.address, snapshot.active_code_id
            )

    def _assert_protocol_caller(self, caller: int) -> None:
        if caller != PROTOCOL_CALLER:
            logger.warning("non_null_caller_rejected", caller=hex(caller))
            raise NonNullCallerError(caller)

    def _assert_supported_version(self, version: int) -> None:
        if not is_supported_tx_version(version, self._config.allow_query_versions):
            logger.warning("unsupported_tx_version", version=hex(version))
            raise UnsupportedVersionError(version)

    def _assert_call_shape(self, calls: Sequence[Call]) -> None:
        address = self._state.address
        if len(calls) == 1:
            call = calls[0]
            if call.targets(address) and call.selector == EXECUTE_AFTER_UPGRADE_SELECTOR:
                logger.warning("forbidden_call", selector=call.selector)
                raise ForbiddenCallError(call.selector)
        elif len(calls) > 1:
            for index, call in enumerate(calls):
                if call.targets(address):
                    logger.warning("forbidden_self_call", index=index)
                    raise ForbiddenSelfCallError(index)
