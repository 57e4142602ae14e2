"""
Gates -- owner and pause access control for every mutating operation.

Responsibility:
    OwnerGate: "caller is administrator" check plus ownership transfer.
    PauseGate: the Active/Paused switch and the check every other mutating
    operation performs first.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    SINGLE_OWNER          -- ownership never moves to the zero address.
    PAUSE_GATED_MUTATION  -- ``require_active`` is the first check of every
                             gated operation.

Failure modes:
    - NotOwnerError, HaltedError, AlreadyPausedError, NotPausedError,
      ZeroAddressOwnerError.  All raised before any mutation.
"""

from __future__ import annotations

from splitter_kernel.domain.events import LedgerEventType
from splitter_kernel.domain.identity import Address
from splitter_kernel.domain.state import LedgerState
from splitter_kernel.exceptions import (
    AlreadyPausedError,
    HaltedError,
    NotOwnerError,
    NotPausedError,
    ZeroAddressOwnerError,
)
from splitter_kernel.logging_config import get_logger

logger = get_logger("domain.gates")


# ---------------------------------------------------------------------------
# OwnerGate
# ---------------------------------------------------------------------------


def require_owner(state: LedgerState, caller: Address) -> None:
    """Raise NotOwnerError unless ``caller`` is the administrator."""
    if caller != state.owner:
        raise NotOwnerError(str(caller))


def transfer_ownership(
    state: LedgerState,
    caller: Address,
    new_owner: Address,
) -> None:
    """Hand the administrator role to ``new_owner``."""
    require_owner(state, caller)
    if new_owner.is_zero:
        raise ZeroAddressOwnerError()

    previous = state.owner
    state.owner = new_owner
    state.emit(
        LedgerEventType.OWNERSHIP_TRANSFERRED,
        caller,
        previous_owner=previous,
        new_owner=new_owner,
    )
    logger.info(
        "ownership_transferred",
        extra={"previous_owner": str(previous), "new_owner": str(new_owner)},
    )


# ---------------------------------------------------------------------------
# PauseGate
# ---------------------------------------------------------------------------


def require_active(state: LedgerState, operation: str) -> None:
    """Raise HaltedError if the ledger is paused."""
    if state.paused:
        raise HaltedError(operation)


def pause(state: LedgerState, caller: Address) -> None:
    """Active -> Paused.  Administrator only."""
    require_owner(state, caller)
    if state.paused:
        raise AlreadyPausedError()

    state.paused = True
    state.emit(LedgerEventType.PAUSED, caller, account=caller)
    logger.info("ledger_paused", extra={"account": str(caller)})


def unpause(state: LedgerState, caller: Address) -> None:
    """Paused -> Active.  Administrator only."""
    require_owner(state, caller)
    if not state.paused:
        raise NotPausedError()

    state.paused = False
    state.emit(LedgerEventType.UNPAUSED, caller, account=caller)
    logger.info("ledger_unpaused", extra={"account": str(caller)})
