"""
Splitter -- in-process host for a single splitter ledger.

Responsibility:
    Exposes the ledger's call surface (add/remove participants, pause,
    split, withdraw, queries) over an in-memory ``LedgerState`` and gives
    every mutating call the atomic, all-or-nothing semantics the domain
    relies on.

Architecture position:
    Kernel > Host.  Thin imperative shell around ``splitter_kernel.domain``.
    The database-backed equivalent is
    ``splitter_kernel.services.splitter_service.SplitterService``.

Invariants enforced:
    ATOMIC_CALLS -- each mutating call takes a checkpoint on entry and
        rolls the state back in place if anything raises, including the
        value sink.
    SOLVENCY     -- verified before a call is allowed to complete.

Failure modes:
    - Any SplitterError raised by the domain, re-raised after rollback.
    - Any exception raised by the value sink, re-raised after rollback.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from splitter_kernel.domain import gates, registry, split, withdrawal
from splitter_kernel.domain.events import LedgerEvent
from splitter_kernel.domain.identity import Address
from splitter_kernel.domain.policy import DEFAULT_POLICY, LedgerPolicy
from splitter_kernel.domain.state import LedgerState
from splitter_kernel.domain.withdrawal import ValueSink
from splitter_kernel.exceptions import SplitterError
from splitter_kernel.logging_config import LogContext, get_logger

logger = get_logger("splitter")


class Wallets:
    """
    In-memory wallet book used as the default ``ValueSink``.

    Records how much value each identity has received from the ledger.
    """

    def __init__(self) -> None:
        self._received: dict[Address, int] = {}

    def release(self, recipient: Address, amount: int) -> None:
        self._received[recipient] = self._received.get(recipient, 0) + amount

    def balance_of(self, identity: Address | str) -> int:
        return self._received.get(Address.parse(identity), 0)


class Splitter:
    """
    One splitter ledger held in memory.

    Every identity argument accepts either an ``Address`` or its string
    form.  Mutating methods take the authenticated caller first.
    """

    def __init__(
        self,
        owner: Address | str,
        *,
        policy: LedgerPolicy = DEFAULT_POLICY,
        sink: ValueSink | None = None,
        ledger_code: str = "in-memory",
    ):
        self._state = LedgerState(owner=Address.parse(owner))
        self.policy = policy
        self.sink: ValueSink = sink if sink is not None else Wallets()
        self.ledger_code = ledger_code

    @contextmanager
    def _call(self, operation: str, caller: Address) -> Iterator[LedgerState]:
        """Run one mutating call as an atomic unit."""
        checkpoint = self._state.checkpoint()
        with LogContext.bind(
            ledger_code=self.ledger_code,
            caller=str(caller),
            operation=operation,
        ):
            try:
                yield self._state
                self._state.verify_solvency()
            except SplitterError as exc:
                self._state.rollback(checkpoint)
                logger.warning("call_rejected", extra={"code": exc.code})
                raise
            except Exception:
                self._state.rollback(checkpoint)
                logger.warning("call_reverted", exc_info=True)
                raise

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def add_participant(self, caller: Address | str, participant: Address | str) -> bool:
        caller, participant = Address.parse(caller), Address.parse(participant)
        with self._call("add_participant", caller) as state:
            return registry.add_participant(state, caller, participant)

    def remove_participant(self, caller: Address | str, participant: Address | str) -> None:
        caller, participant = Address.parse(caller), Address.parse(participant)
        with self._call("remove_participant", caller) as state:
            registry.remove_participant(state, caller, participant)

    def pause(self, caller: Address | str) -> None:
        caller = Address.parse(caller)
        with self._call("pause", caller) as state:
            gates.pause(state, caller)

    def unpause(self, caller: Address | str) -> None:
        caller = Address.parse(caller)
        with self._call("unpause", caller) as state:
            gates.unpause(state, caller)

    def transfer_ownership(self, caller: Address | str, new_owner: Address | str) -> None:
        caller, new_owner = Address.parse(caller), Address.parse(new_owner)
        with self._call("transfer_ownership", caller) as state:
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
        """Deposit ``value`` and credit half to each recipient."""
        caller = Address.parse(caller)
        recipient1, recipient2 = Address.parse(recipient1), Address.parse(recipient2)
        with self._call("split_eth", caller) as state:
            return split.split_eth(
                state, caller, recipient1, recipient2, value, self.policy
            )

    def withdraw(self, caller: Address | str) -> int:
        """Claim the caller's whole balance.  Returns the amount released."""
        caller = Address.parse(caller)
        with self._call("withdraw", caller) as state:
            return withdrawal.withdraw(state, caller, self.sink, self.policy)

    # ------------------------------------------------------------------
    # Queries (never gated)
    # ------------------------------------------------------------------

    def owner(self) -> Address:
        return self._state.owner

    def is_paused(self) -> bool:
        return self._state.paused

    def is_active_participant(self, identity: Address | str) -> bool:
        return registry.is_active_participant(self._state, Address.parse(identity))

    def list_active_participants(self) -> tuple[Address, ...]:
        return registry.list_active_participants(self._state)

    def balance_of(self, identity: Address | str) -> int:
        return self._state.balance_of(Address.parse(identity))

    def held_value(self) -> int:
        return self._state.held_value

    def events(self) -> tuple[LedgerEvent, ...]:
        return tuple(self._state.events)

    def canonical_hash(self) -> str:
        return self._state.canonical_hash()
