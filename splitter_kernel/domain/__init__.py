"""
Splitter domain -- pure functional core.

Every operation takes a ``LedgerState`` explicitly and either mutates it
after all of its checks pass or raises a typed ``SplitterError`` without
touching it.  Hosts (``splitter_kernel.splitter`` in memory,
``splitter_kernel.services`` over SQLAlchemy) supply atomicity and value
release.
"""

from splitter_kernel.domain.events import LedgerEvent, LedgerEventType
from splitter_kernel.domain.gates import (
    pause,
    require_active,
    require_owner,
    transfer_ownership,
    unpause,
)
from splitter_kernel.domain.identity import ZERO_ADDRESS, Address
from splitter_kernel.domain.policy import DEFAULT_POLICY, LedgerPolicy
from splitter_kernel.domain.registry import (
    add_participant,
    is_active_participant,
    list_active_participants,
    remove_participant,
)
from splitter_kernel.domain.split import SplitResult, halve, split_eth
from splitter_kernel.domain.state import LedgerState, StateCheckpoint
from splitter_kernel.domain.withdrawal import (
    Payout,
    ValueSink,
    debit_for_withdrawal,
    release,
    withdraw,
)

__all__ = [
    "Address",
    "ZERO_ADDRESS",
    "LedgerState",
    "StateCheckpoint",
    "LedgerPolicy",
    "DEFAULT_POLICY",
    "LedgerEvent",
    "LedgerEventType",
    "require_owner",
    "require_active",
    "transfer_ownership",
    "pause",
    "unpause",
    "add_participant",
    "remove_participant",
    "is_active_participant",
    "list_active_participants",
    "SplitResult",
    "halve",
    "split_eth",
    "Payout",
    "ValueSink",
    "debit_for_withdrawal",
    "release",
    "withdraw",
]
