"""
Module: splitter_kernel.selectors.ledger_selector
Responsibility: Read-only queries over persisted splitter ledgers: status,
    balances, the participant registry, the event journal, and the canonical
    state hash.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - Queries are never pause-gated; a paused ledger remains fully readable.
    - canonical_hash() matches ``LedgerState.canonical_hash()`` for the same
      observable state, so a persisted ledger can be compared with an
      in-memory replay.

Failure modes:
    - LedgerNotFoundError for an unknown ledger_code.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import select

from splitter_kernel.domain.events import LedgerEvent
from splitter_kernel.domain.identity import Address
from splitter_kernel.domain.policy import LedgerPolicy
from splitter_kernel.domain.state import canonical_hash
from splitter_kernel.exceptions import LedgerNotFoundError
from splitter_kernel.models.balance import BalanceRecord
from splitter_kernel.models.event import LedgerEventRecord
from splitter_kernel.models.ledger import LedgerRecord
from splitter_kernel.models.participant import ParticipantRecord
from splitter_kernel.selectors.base import BaseSelector


@dataclass(frozen=True)
class LedgerStatus:
    """Summary of one persisted ledger."""

    ledger_code: str
    owner: Address
    paused: bool
    held_value: int
    total_owed: int
    participant_count: int
    last_event_seq: int
    policy: LedgerPolicy


class LedgerSelector(BaseSelector):
    """Selector for splitter ledger queries."""

    def _record(self, ledger_code: str) -> LedgerRecord:
        record = self.session.execute(
            select(LedgerRecord).where(LedgerRecord.ledger_code == ledger_code)
        ).scalar_one_or_none()
        if record is None:
            raise LedgerNotFoundError(ledger_code)
        return record

    def ledger_codes(self) -> list[str]:
        return list(
            self.session.execute(
                select(LedgerRecord.ledger_code).order_by(LedgerRecord.ledger_code)
            ).scalars()
        )

    def status(self, ledger_code: str) -> LedgerStatus:
        record = self._record(ledger_code)
        return LedgerStatus(
            ledger_code=record.ledger_code,
            owner=record.owner,
            paused=record.paused,
            held_value=record.held_value,
            total_owed=sum(self._balances(record).values()),
            participant_count=len(self._participants(record)),
            last_event_seq=record.last_event_seq,
            policy=record.policy,
        )

    def owner(self, ledger_code: str) -> Address:
        return self._record(ledger_code).owner

    def is_paused(self, ledger_code: str) -> bool:
        return self._record(ledger_code).paused

    def held_value(self, ledger_code: str) -> int:
        return self._record(ledger_code).held_value

    def balance_of(self, ledger_code: str, identity: Address) -> int:
        record = self._record(ledger_code)
        amount = self.session.execute(
            select(BalanceRecord.amount).where(
                BalanceRecord.ledger_id == record.id,
                BalanceRecord.address == identity,
            )
        ).scalar_one_or_none()
        return amount or 0

    def balances(self, ledger_code: str) -> dict[Address, int]:
        """All nonzero balances, keyed by identity."""
        return {
            address: amount
            for address, amount in self._balances(self._record(ledger_code)).items()
            if amount
        }

    def active_participants(self, ledger_code: str) -> tuple[Address, ...]:
        """Active participants in the order they were added."""
        return self._participants(self._record(ledger_code))

    def is_active_participant(self, ledger_code: str, identity: Address) -> bool:
        record = self._record(ledger_code)
        found = self.session.execute(
            select(ParticipantRecord.id).where(
                ParticipantRecord.ledger_id == record.id,
                ParticipantRecord.address == identity,
            )
        ).scalar_one_or_none()
        return found is not None

    def events(self, ledger_code: str, since_seq: int = 0) -> list[LedgerEvent]:
        """Journal entries with seq greater than ``since_seq``, oldest first."""
        record = self._record(ledger_code)
        rows = self.session.execute(
            select(LedgerEventRecord)
            .where(
                LedgerEventRecord.ledger_id == record.id,
                LedgerEventRecord.seq > since_seq,
            )
            .order_by(LedgerEventRecord.seq)
        ).scalars()
        return [row.to_domain() for row in rows]

    def canonical_hash(self, ledger_code: str) -> str:
        record = self._record(ledger_code)
        return canonical_hash(
            owner=record.owner,
            paused=record.paused,
            held_value=record.held_value,
            participants=self._participants(record),
            balances=self._balances(record),
        )

    def _participants(self, record: LedgerRecord) -> tuple[Address, ...]:
        return tuple(
            self.session.execute(
                select(ParticipantRecord.address)
                .where(ParticipantRecord.ledger_id == record.id)
                .order_by(ParticipantRecord.position)
            ).scalars()
        )

    def _balances(self, record: LedgerRecord) -> dict[Address, int]:
        rows = self.session.execute(
            select(BalanceRecord.address, BalanceRecord.amount).where(
                BalanceRecord.ledger_id == record.id
            )
        ).all()
        return {address: amount for address, amount in rows}
