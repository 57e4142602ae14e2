"""
SplitterService -- database host for splitter ledgers.

Responsibility:
    Exposes the same call surface as the in-process ``Splitter`` over a
    persisted ledger.  Each mutating call locks the ledger row, loads the
    ledger into a ``LedgerState``, runs the domain operation, verifies
    solvency, and writes the result back with ``session.flush()``.

Architecture position:
    Kernel > Services -- imperative shell around ``splitter_kernel.domain``.
    Read-only queries delegate to ``LedgerSelector``.

Invariants enforced:
    ATOMIC_CALLS -- a rejected call never reaches ``store``; the session is
        left exactly as it was.  A failure after ``store`` (the value sink in
        ``withdraw``) propagates so that the caller's ``session_scope`` rolls
        the whole call back.
    ZERO_BEFORE_RELEASE -- ``withdraw`` flushes the zeroed balance before
        calling the sink, so a sink that re-enters the service in the same
        session reads a zero balance.

Failure modes:
    - LedgerNotFoundError for an unknown ledger_code.
    - Any SplitterError from the domain.
    - Any exception raised by the value sink.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from splitter_kernel.domain import gates, registry, split, withdrawal
from splitter_kernel.domain.events import LedgerEvent
from splitter_kernel.domain.identity import Address
from splitter_kernel.domain.policy import DEFAULT_POLICY, LedgerPolicy
from splitter_kernel.domain.state import LedgerState
from splitter_kernel.domain.withdrawal import ValueSink
from splitter_kernel.exceptions import SplitterError
from splitter_kernel.logging_config import LogContext, get_logger
from splitter_kernel.selectors.ledger_selector import LedgerSelector, LedgerStatus
from splitter_kernel.services.base import BaseService
from splitter_kernel.services.state_repository import LedgerStateRepository

logger = get_logger("services.splitter")


class SplitterService(BaseService):
    """
    Operate one persisted ledger within the caller's transaction.

    Identity arguments accept ``Address`` or its string form.
    """

    def __init__(
        self,
        session: Session,
        ledger_code: str,
        sink: ValueSink | None = None,
    ):
        super().__init__(session)
        self.ledger_code = ledger_code
        self.sink = sink
        self._repository = LedgerStateRepository(session)
        self._selector = LedgerSelector(session)

    @classmethod
    def open_ledger(
        cls,
        session: Session,
        ledger_code: str,
        owner: Address | str,
        policy: LedgerPolicy = DEFAULT_POLICY,
        initial_participants: Iterable[Address | str] = (),
        sink: ValueSink | None = None,
    ) -> SplitterService:
        """
        Create a ledger owned by ``owner`` and register its first participants.

        Raises:
            LedgerAlreadyExistsError: if ``ledger_code`` is taken.
        """
        owner = Address.parse(owner)
        repository = LedgerStateRepository(session)
        repository.create(ledger_code, owner, policy)
        logger.info(
            "ledger_opened",
            extra={"ledger_code": ledger_code, "owner": str(owner)},
        )

        service = cls(session, ledger_code, sink=sink)
        for participant in initial_participants:
            service.add_participant(owner, participant)
        return service

    @contextmanager
    def _call(self, operation: str, caller: Address) -> Iterator[tuple[LedgerState, LedgerPolicy]]:
        """Load, mutate, verify and store one call against the locked ledger row."""
        with LogContext.bind(
            ledger_code=self.ledger_code,
            caller=str(caller),
            operation=operation,
        ):
            record = self._repository.get_record(self.ledger_code, for_update=True)
            state = self._repository.load(record)
            try:
                yield state, record.policy
                state.verify_solvency()
            except SplitterError as exc:
                logger.warning("call_rejected", extra={"code": exc.code})
                raise
            self._repository.store(record, state)

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def add_participant(self, caller: Address | str, participant: Address | str) -> bool:
        caller, participant = Address.parse(caller), Address.parse(participant)
        with self._call("add_participant", caller) as (state, _):
            added = registry.add_participant(state, caller, participant)
        return added

    def remove_participant(self, caller: Address | str, participant: Address | str) -> None:
        caller, participant = Address.parse(caller), Address.parse(participant)
        with self._call("remove_participant", caller) as (state, _):
            registry.remove_participant(state, caller, participant)

    def pause(self, caller: Address | str) -> None:
        caller = Address.parse(caller)
        with self._call("pause", caller) as (state, _):
            gates.pause(state, caller)

    def unpause(self, caller: Address | str) -> None:
        caller = Address.parse(caller)
        with self._call("unpause", caller) as (state, _):
            gates.unpause(state, caller)

    def transfer_ownership(self, caller: Address | str, new_owner: Address | str) -> None:
        caller, new_owner = Address.parse(caller), Address.parse(new_owner)
        with self._call("transfer_ownership", caller) as (state, _):
            gates.transfer_ownership(state, caller, new_owner)

    # ------------------------------------------------------------------
    # Value flow
    # ------------------------------------------------------------------

    def split_eth(
        self,
        caller: Address | str,
        recipient1: Address | str,
        recipient2: Address | str,
        *,
        value: int,
    ) -> split.SplitResult:
        caller = Address.parse(caller)
        recipient1, recipient2 = Address.parse(recipient1), Address.parse(recipient2)
        with self._call("split_eth", caller) as (state, policy):
            result = split.split_eth(state, caller, recipient1, recipient2, value, policy)
        return result

    def withdraw(self, caller: Address | str) -> int:
        """
        Claim the caller's whole balance.

        The zeroed balance is flushed before the sink is called.  Returns
        the amount released.

        Raises:
            RuntimeError: if the service was built without a value sink.
        """
        if self.sink is None:
            raise RuntimeError("SplitterService.withdraw requires a value sink")
        caller = Address.parse(caller)
        with self._call("withdraw", caller) as (state, policy):
            payout = withdrawal.debit_for_withdrawal(state, caller, policy)
        with LogContext.bind(ledger_code=self.ledger_code, caller=str(caller), operation="withdraw"):
            return withdrawal.release(payout, self.sink)

    # ------------------------------------------------------------------
    # Queries (never gated)
    # ------------------------------------------------------------------

    def status(self) -> LedgerStatus:
        return self._selector.status(self.ledger_code)

    def owner(self) -> Address:
        return self._selector.owner(self.ledger_code)

    def is_paused(self) -> bool:
        return self._selector.is_paused(self.ledger_code)

    def is_active_participant(self, identity: Address | str) -> bool:
        return self._selector.is_active_participant(self.ledger_code, Address.parse(identity))

    def list_active_participants(self) -> tuple[Address, ...]:
        return self._selector.active_participants(self.ledger_code)

    def balance_of(self, identity: Address | str) -> int:
        return self._selector.balance_of(self.ledger_code, Address.parse(identity))

    def held_value(self) -> int:
        return self._selector.held_value(self.ledger_code)

    def events(self, since_seq: int = 0) -> list[LedgerEvent]:
        return self._selector.events(self.ledger_code, since_seq)

    def canonical_hash(self) -> str:
        return self._selector.canonical_hash(self.ledger_code)
