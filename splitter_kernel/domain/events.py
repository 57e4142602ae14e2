"""
Ledger events -- the append-only journal of successful mutations.

Every successful mutating call appends at least one ``LedgerEvent`` to the
ledger state.  Failed calls append nothing (the hosts discard the working
state on failure).  ``seq`` is strictly increasing per ledger.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from splitter_kernel.domain.identity import Address


class LedgerEventType(str, Enum):
    """Kinds of journal entries a ledger can emit."""

    PARTICIPANT_ADDED = "ParticipantAdded"
    PARTICIPANT_REMOVED = "ParticipantRemoved"
    SPLIT_PERFORMED = "SplitPerformed"
    WITHDRAWN = "Withdrawn"
    PAUSED = "Paused"
    UNPAUSED = "Unpaused"
    OWNERSHIP_TRANSFERRED = "OwnershipTransferred"


@dataclass(frozen=True)
class LedgerEvent:
    """
    One journal entry.

    ``data`` holds event-specific fields; identities are stored as
    ``Address`` and amounts as ``int``.  It is a read-only view over a
    private copy, so a published event cannot be rewritten.
    """

    seq: int
    event_type: LedgerEventType
    actor: Address
    data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-ready representation (addresses as strings)."""
        return {
            "seq": self.seq,
            "event_type": self.event_type.value,
            "actor": str(self.actor),
            "data": {
                k: str(v) if isinstance(v, Address) else v
                for k, v in self.data.items()
            },
        }
