"""
Module: splitter_kernel.models.participant
Responsibility: ORM persistence for the participant registry.  A row exists
    exactly while the identity is an active participant; removal deletes it
    (no soft-delete state is retained).

Invariants enforced:
    UNIQUE_PARTICIPANTS -- (ledger_id, address) is unique.
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from splitter_kernel.db.base import AddressString, TimestampedBase, UUIDString
from splitter_kernel.domain.identity import Address


class ParticipantRecord(TimestampedBase):
    """Active participant of one ledger."""

    __tablename__ = "splitter_participants"

    __table_args__ = (
        UniqueConstraint("ledger_id", "address", name="uq_participant_address"),
        Index("idx_participant_ledger", "ledger_id"),
    )

    ledger_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("splitter_ledgers.id", ondelete="CASCADE"),
        nullable=False,
    )

    address: Mapped[Address] = mapped_column(
        AddressString(),
        nullable=False,
    )

    # Journal seq at which the participant was added; orders the listing
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ParticipantRecord {self.address}>"
