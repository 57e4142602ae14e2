"""
LedgerState -- the single state structure every domain operation acts on.

Responsibility:
    Holds the administrator, the paused flag, the participant registry,
    the balance ledger, the held value, and the event journal of one
    splitter ledger.  Domain operations receive it explicitly; there is no
    process-wide state.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    SOLVENCY -- ``verify_solvency`` raises if owed balances exceed held value.

Failure modes:
    - SolvencyViolationError from ``verify_solvency``.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from splitter_kernel.domain.events import LedgerEvent, LedgerEventType
from splitter_kernel.domain.identity import Address
from splitter_kernel.exceptions import SolvencyViolationError


@dataclass
class LedgerState:
    """
    Mutable state of one ledger.

    ``participants`` is a dict used as an insertion-ordered set.
    ``balances`` maps identities to owed amounts; absent keys read as zero.
    ``events`` holds the journal entries emitted since the state was
    loaded (the whole journal for an in-process ledger); ``event_seq`` is
    the seq of the last event ever emitted.
    """

    owner: Address
    paused: bool = False
    participants: dict[Address, None] = field(default_factory=dict)
    balances: dict[Address, int] = field(default_factory=dict)
    held_value: int = 0
    event_seq: int = 0
    events: list[LedgerEvent] = field(default_factory=list)

    def balance_of(self, identity: Address) -> int:
        return self.balances.get(identity, 0)

    def total_owed(self) -> int:
        return sum(self.balances.values())

    def emit(
        self,
        event_type: LedgerEventType,
        actor: Address,
        **data: Any,
    ) -> LedgerEvent:
        """Append a journal entry with the next sequence number."""
        self.event_seq += 1
        event = LedgerEvent(
            seq=self.event_seq,
            event_type=event_type,
            actor=actor,
            data=data,
        )
        self.events.append(event)
        return event

    def verify_solvency(self) -> None:
        owed = self.total_owed()
        if owed > self.held_value:
            raise SolvencyViolationError(owed=owed, held=self.held_value)

    def canonical_hash(self) -> str:
        """
        Deterministic SHA-256 over owner, pause flag, held value, the
        participant set and the nonzero balances.

        Independent of insertion order, journal contents and zero-balance
        entries, so two hosts that applied the same calls agree on it.
        """
        return canonical_hash(
            owner=self.owner,
            paused=self.paused,
            held_value=self.held_value,
            participants=self.participants,
            balances=self.balances,
        )

    def checkpoint(self) -> StateCheckpoint:
        """
        Rollback token for the current state, used by hosts around each call.

        Addresses and amounts are immutable, so shallow copies of the two
        maps suffice.  The journal is append-only within a call and is
        recorded by length only.
        """
        return StateCheckpoint(
            owner=self.owner,
            paused=self.paused,
            participants=dict(self.participants),
            balances=dict(self.balances),
            held_value=self.held_value,
            event_seq=self.event_seq,
            event_count=len(self.events),
        )

    def rollback(self, checkpoint: StateCheckpoint) -> None:
        """Return this state in place to ``checkpoint``, dropping newer events."""
        self.owner = checkpoint.owner
        self.paused = checkpoint.paused
        self.participants = dict(checkpoint.participants)
        self.balances = dict(checkpoint.balances)
        self.held_value = checkpoint.held_value
        self.event_seq = checkpoint.event_seq
        del self.events[checkpoint.event_count:]


@dataclass(frozen=True)
class StateCheckpoint:
    owner: Address
    paused: bool
    participants: dict[Address, None]
    balances: dict[Address, int]
    held_value: int
    event_seq: int
    event_count: int


def canonical_hash(
    *,
    owner: Address,
    paused: bool,
    held_value: int,
    participants: Iterable[Address],
    balances: Mapping[Address, int],
) -> str:
    """SHA-256 of the canonical JSON form of a ledger's observable state."""
    canonical = {
        "owner": str(owner),
        "paused": paused,
        "held_value": str(held_value),
        "participants": sorted(str(p) for p in participants),
        "balances": sorted(
            (str(address), str(amount))
            for address, amount in balances.items()
            if amount
        ),
    }
    encoded = json.dumps(canonical, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()
