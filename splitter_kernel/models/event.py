"""
Module: splitter_kernel.models.event
Responsibility: ORM persistence for the ledger event journal.  Rows are
    append-only: the repository inserts them and nothing updates or deletes
    them.

Invariants enforced:
    - (ledger_id, seq) is unique; seq is strictly increasing per ledger.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import JSON, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from splitter_kernel.db.base import AddressString, TimestampedBase, UUIDString
from splitter_kernel.domain.events import LedgerEvent, LedgerEventType
from splitter_kernel.domain.identity import Address

# Event data keys that hold identities rather than plain values
_ADDRESS_KEYS = frozenset(
    {"participant", "recipient", "recipient1", "recipient2", "account",
     "previous_owner", "new_owner"}
)


class LedgerEventRecord(TimestampedBase):
    """One journal entry of one ledger."""

    __tablename__ = "splitter_events"

    __table_args__ = (
        UniqueConstraint("ledger_id", "seq", name="uq_event_seq"),
    )

    ledger_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("splitter_ledgers.id", ondelete="CASCADE"),
        nullable=False,
    )

    seq: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    event_type: Mapped[str] = mapped_column(
        String(40),
        nullable=False,
    )

    actor: Mapped[Address] = mapped_column(
        AddressString(),
        nullable=False,
    )

    # Amounts are stored as strings so JSON never narrows them to float
    payload: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
    )

    @classmethod
    def from_domain(cls, ledger_id: UUID, event: LedgerEvent) -> "LedgerEventRecord":
        return cls(
            ledger_id=ledger_id,
            seq=event.seq,
            event_type=event.event_type.value,
            actor=event.actor,
            payload={k: str(v) for k, v in event.data.items()},
        )

    def to_domain(self) -> LedgerEvent:
        data: dict[str, Any] = {}
        for key, raw in self.payload.items():
            data[key] = Address(raw) if key in _ADDRESS_KEYS else int(raw)
        return LedgerEvent(
            seq=self.seq,
            event_type=LedgerEventType(self.event_type),
            actor=self.actor,
            data=data,
        )

    def __repr__(self) -> str:
        return f"<LedgerEventRecord #{self.seq} {self.event_type}>"
