"""
LedgerStateRepository -- maps persisted ledger rows to and from ``LedgerState``.

Responsibility:
    Loads the full state of one ledger into the domain's ``LedgerState``
    and writes a mutated state back as row inserts, updates and deletes.
    The journal is not loaded: a loaded state starts with an empty
    ``events`` list and ``event_seq`` set to the ledger's cursor, so every
    event present at store time is new.

Architecture position:
    Kernel > Services.  Used only by ``SplitterService``; flushes, never
    commits.

Failure modes:
    - LedgerNotFoundError if no ledger has the requested code.
    - LedgerAlreadyExistsError when creating a duplicate code.
"""

from __future__ import annotations

from sqlalchemy import select

from splitter_kernel.domain.events import LedgerEventType
from splitter_kernel.domain.identity import Address
from splitter_kernel.domain.policy import LedgerPolicy
from splitter_kernel.domain.state import LedgerState
from splitter_kernel.exceptions import LedgerAlreadyExistsError, LedgerNotFoundError
from splitter_kernel.models.balance import BalanceRecord
from splitter_kernel.models.event import LedgerEventRecord
from splitter_kernel.models.ledger import LedgerRecord
from splitter_kernel.models.participant import ParticipantRecord
from splitter_kernel.services.base import BaseService


class LedgerStateRepository(BaseService):
    """Row-level persistence for ``LedgerState``."""

    def create(
        self,
        ledger_code: str,
        owner: Address,
        policy: LedgerPolicy,
    ) -> LedgerRecord:
        existing = self.session.execute(
            select(LedgerRecord.id).where(LedgerRecord.ledger_code == ledger_code)
        ).scalar_one_or_none()
        if existing is not None:
            raise LedgerAlreadyExistsError(ledger_code)

        record = LedgerRecord(
            ledger_code=ledger_code,
            owner=owner,
            paused=False,
            held_value=0,
            last_event_seq=0,
            require_participant_caller=policy.require_participant_caller,
            min_participants=policy.min_participants,
            pause_blocks_withdrawals=policy.pause_blocks_withdrawals,
        )
        self.session.add(record)
        self.session.flush()
        return record

    def get_record(self, ledger_code: str, for_update: bool = False) -> LedgerRecord:
        """Fetch the ledger row, optionally locking it for the current transaction."""
        stmt = select(LedgerRecord).where(LedgerRecord.ledger_code == ledger_code)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        record = self.session.execute(stmt).scalar_one_or_none()
        if record is None:
            raise LedgerNotFoundError(ledger_code)
        return record

    def load(self, record: LedgerRecord) -> LedgerState:
        participants = self.session.execute(
            select(ParticipantRecord.address)
            .where(ParticipantRecord.ledger_id == record.id)
            .order_by(ParticipantRecord.position)
        ).scalars().all()

        balances = self.session.execute(
            select(BalanceRecord).where(BalanceRecord.ledger_id == record.id)
        ).scalars().all()

        return LedgerState(
            owner=record.owner,
            paused=record.paused,
            participants=dict.fromkeys(participants),
            balances={row.address: row.amount for row in balances},
            held_value=record.held_value,
            event_seq=record.last_event_seq,
        )

    def store(self, record: LedgerRecord, state: LedgerState) -> None:
        """Write ``state`` back over the rows it was loaded from."""
        self._store_participants(record, state)
        self._store_balances(record, state)

        for event in state.events:
            self.session.add(LedgerEventRecord.from_domain(record.id, event))

        record.owner = state.owner
        record.paused = state.paused
        record.held_value = state.held_value
        record.last_event_seq = state.event_seq

        self.session.flush()

    def _store_participants(self, record: LedgerRecord, state: LedgerState) -> None:
        rows = self.session.execute(
            select(ParticipantRecord).where(ParticipantRecord.ledger_id == record.id)
        ).scalars().all()
        existing = {row.address: row for row in rows}

        for address, row in existing.items():
            if address not in state.participants:
                self.session.delete(row)

        added_at = {
            event.data["participant"]: event.seq
            for event in state.events
            if event.event_type == LedgerEventType.PARTICIPANT_ADDED
        }
        for address in state.participants:
            if address not in existing:
                self.session.add(
                    ParticipantRecord(
                        ledger_id=record.id,
                        address=address,
                        position=added_at.get(address, state.event_seq),
                    )
                )

    def _store_balances(self, record: LedgerRecord, state: LedgerState) -> None:
        rows = self.session.execute(
            select(BalanceRecord).where(BalanceRecord.ledger_id == record.id)
        ).scalars().all()
        existing = {row.address: row for row in rows}

        for address, amount in state.balances.items():
            row = existing.get(address)
            if row is None:
                self.session.add(
                    BalanceRecord(ledger_id=record.id, address=address, amount=amount)
                )
            elif row.amount != amount:
                row.amount = amount
