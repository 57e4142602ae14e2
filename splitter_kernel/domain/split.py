"""
SplitLedger -- validate a deposit and credit it evenly to two recipients.

Responsibility:
    Runs the split eligibility checks in a fixed order and, only when all
    pass, credits ``value // 2`` to each recipient and records the deposit
    as held value.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.  A split never
    releases value to anyone; recipients claim their credit through the
    withdrawal gate.

Invariants enforced:
    EVEN_SPLIT   -- odd values are rejected, never rounded.
    ATOMIC_CALLS -- every check runs before the first mutation.

Failure modes (in check order):
    1. HaltedError                 -- ledger paused
    2. NotParticipantError         -- caller not whitelisted (policy)
       NotEnoughParticipantsError  -- registry below policy minimum
    3. ZeroValueError / NegativeValueError
    4. UnevenSplitError
    5. SelfSplitError
    6. DuplicateRecipientError
"""

from __future__ import annotations

from dataclasses import dataclass

from splitter_kernel.domain.events import LedgerEventType
from splitter_kernel.domain.gates import require_active
from splitter_kernel.domain.identity import Address
from splitter_kernel.domain.policy import DEFAULT_POLICY, LedgerPolicy
from splitter_kernel.domain.state import LedgerState
from splitter_kernel.exceptions import (
    DuplicateRecipientError,
    NegativeValueError,
    NotEnoughParticipantsError,
    NotParticipantError,
    SelfSplitError,
    UnevenSplitError,
    ZeroValueError,
)
from splitter_kernel.logging_config import get_logger

logger = get_logger("domain.split")


@dataclass(frozen=True)
class SplitResult:
    """Outcome of a successful split."""

    sender: Address
    recipient1: Address
    recipient2: Address
    value: int
    share: int


def halve(value: int) -> int:
    """
    Exact integer half of a positive ``value``.

    Raises:
        TypeError: if ``value`` is not an int (bool excluded).
        ZeroValueError, NegativeValueError, UnevenSplitError.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"value must be int, got {type(value).__name__}")
    if value == 0:
        raise ZeroValueError()
    if value < 0:
        raise NegativeValueError(value)
    share, remainder = divmod(value, 2)
    if remainder:
        raise UnevenSplitError(value)
    return share


def split_eth(
    state: LedgerState,
    caller: Address,
    recipient1: Address,
    recipient2: Address,
    value: int,
    policy: LedgerPolicy = DEFAULT_POLICY,
) -> SplitResult:
    """Credit half of ``value`` to each recipient."""
    require_active(state, "split_eth")

    if policy.require_participant_caller and caller not in state.participants:
        raise NotParticipantError(str(caller))
    if policy.min_participants and len(state.participants) < policy.min_participants:
        raise NotEnoughParticipantsError(
            active=len(state.participants),
            required=policy.min_participants,
        )

    share = halve(value)

    if recipient1 == caller or recipient2 == caller:
        raise SelfSplitError(str(caller))
    if recipient1 == recipient2:
        raise DuplicateRecipientError(str(recipient1))

    # All checks passed: mutate
    state.balances[recipient1] = state.balance_of(recipient1) + share
    state.balances[recipient2] = state.balance_of(recipient2) + share
    state.held_value += value

    state.emit(
        LedgerEventType.SPLIT_PERFORMED,
        caller,
        recipient1=recipient1,
        recipient2=recipient2,
        value=value,
        share=share,
    )
    logger.info(
        "split_performed",
        extra={
            "recipient1": str(recipient1),
            "recipient2": str(recipient2),
            "value": value,
            "share": share,
        },
    )
    return SplitResult(
        sender=caller,
        recipient1=recipient1,
        recipient2=recipient2,
        value=value,
        share=share,
    )
