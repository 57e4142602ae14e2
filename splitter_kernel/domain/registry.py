"""
ParticipantRegistry -- the whitelist of identities allowed to split.

Mutations are administrator-only and pause-gated (PauseGate first, then
OwnerGate, then membership).  Queries are never gated.
"""

from __future__ import annotations

from splitter_kernel.domain.events import LedgerEventType
from splitter_kernel.domain.gates import require_active, require_owner
from splitter_kernel.domain.identity import Address
from splitter_kernel.domain.state import LedgerState
from splitter_kernel.exceptions import ParticipantNotFoundError
from splitter_kernel.logging_config import get_logger

logger = get_logger("domain.registry")


def add_participant(
    state: LedgerState,
    caller: Address,
    participant: Address,
) -> bool:
    """
    Mark ``participant`` active.

    Returns:
        True if the identity was newly added, False if it was already
        active (no-op, no event).
    """
    require_active(state, "add_participant")
    require_owner(state, caller)

    if participant in state.participants:
        logger.debug(
            "participant_already_active",
            extra={"participant": str(participant)},
        )
        return False

    state.participants[participant] = None
    state.emit(LedgerEventType.PARTICIPANT_ADDED, caller, participant=participant)
    logger.info("participant_added", extra={"participant": str(participant)})
    return True


def remove_participant(
    state: LedgerState,
    caller: Address,
    participant: Address,
) -> None:
    """Remove an active participant.  Absent identities cannot be removed."""
    require_active(state, "remove_participant")
    require_owner(state, caller)

    if participant not in state.participants:
        raise ParticipantNotFoundError(str(participant))

    del state.participants[participant]
    state.emit(LedgerEventType.PARTICIPANT_REMOVED, caller, participant=participant)
    logger.info("participant_removed", extra={"participant": str(participant)})


def is_active_participant(state: LedgerState, identity: Address) -> bool:
    return identity in state.participants


def list_active_participants(state: LedgerState) -> tuple[Address, ...]:
    """Active participants in the order they were added."""
    return tuple(state.participants)
