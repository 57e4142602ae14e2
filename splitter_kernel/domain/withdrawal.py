"""
WithdrawalGate -- pull-based release of credited balances.

Responsibility:
    Lets any identity with a nonzero credited balance claim all of it.
    The claim is split into two steps so that hosts can persist the first
    before performing the second:

        debit_for_withdrawal()  -- check, zero the balance, shrink held
                                   value, journal the withdrawal
        ValueSink.release()     -- hand the value to the caller

    ``withdraw`` composes both for hosts that keep state in memory.

Architecture position:
    Kernel > Domain.  ``ValueSink`` is the one outward-facing seam; the
    domain never decides how value physically leaves the ledger.

Invariants enforced:
    ZERO_BEFORE_RELEASE -- the balance entry is zero before the sink is
        called, so a sink that re-enters ``withdraw`` for the same caller
        hits ZeroBalanceError.

Failure modes:
    - HaltedError when paused and the policy blocks withdrawals.
    - ZeroBalanceError when nothing is owed.
    - Whatever the sink raises; hosts roll the whole call back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from splitter_kernel.domain.events import LedgerEventType
from splitter_kernel.domain.gates import require_active
from splitter_kernel.domain.identity import Address
from splitter_kernel.domain.policy import DEFAULT_POLICY, LedgerPolicy
from splitter_kernel.domain.state import LedgerState
from splitter_kernel.exceptions import ZeroBalanceError
from splitter_kernel.logging_config import get_logger

logger = get_logger("domain.withdrawal")


class ValueSink(Protocol):
    """Destination for released value (wallet book, chain adapter, ...)."""

    def release(self, recipient: Address, amount: int) -> None: ...


@dataclass(frozen=True)
class Payout:
    """Value owed to ``recipient`` after a successful debit."""

    recipient: Address
    amount: int


def debit_for_withdrawal(
    state: LedgerState,
    caller: Address,
    policy: LedgerPolicy = DEFAULT_POLICY,
) -> Payout:
    """Zero the caller's balance and return what must be released."""
    if policy.pause_blocks_withdrawals:
        require_active(state, "withdraw")

    amount = state.balance_of(caller)
    if amount <= 0:
        raise ZeroBalanceError(str(caller))

    state.balances[caller] = 0
    state.held_value -= amount
    state.emit(LedgerEventType.WITHDRAWN, caller, recipient=caller, amount=amount)
    logger.info("withdrawal_debited", extra={"amount": amount})
    return Payout(recipient=caller, amount=amount)


def release(payout: Payout, sink: ValueSink) -> int:
    """Hand a debited payout to the sink and return the amount released."""
    sink.release(payout.recipient, payout.amount)
    logger.info(
        "withdrawal_released",
        extra={"recipient": str(payout.recipient), "amount": payout.amount},
    )
    return payout.amount


def withdraw(
    state: LedgerState,
    caller: Address,
    sink: ValueSink,
    policy: LedgerPolicy = DEFAULT_POLICY,
) -> int:
    """Debit then release, in that order."""
    payout = debit_for_withdrawal(state, caller, policy)
    return release(payout, sink)
