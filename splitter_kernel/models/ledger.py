"""
Module: splitter_kernel.models.ledger
Responsibility: ORM persistence for the scalar state of one splitter ledger:
    its administrator, pause flag, held value, journal cursor, and the
    operating policy it was opened with.
Architecture position: Kernel > Models.  May import from db/base.py and the
    domain value objects only.

Invariants enforced:
    - ledger_code is unique (uq_ledger_code); several ledgers may share one
      database.
    - owner is NOT NULL (exactly one administrator at all times).
    - held_value is stored exactly (AmountString), never as float.

Failure modes:
    - IntegrityError on duplicate ledger_code.
"""

from sqlalchemy import Boolean, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from splitter_kernel.db.base import AddressString, AmountString, TimestampedBase
from splitter_kernel.domain.identity import Address
from splitter_kernel.domain.policy import LedgerPolicy


class LedgerRecord(TimestampedBase):
    """
    One persisted splitter ledger.

    The row is locked (SELECT ... FOR UPDATE on PostgreSQL) at the start of
    every mutating call, which serializes calls against the same ledger.
    """

    __tablename__ = "splitter_ledgers"

    __table_args__ = (
        UniqueConstraint("ledger_code", name="uq_ledger_code"),
    )

    ledger_code: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    owner: Mapped[Address] = mapped_column(
        AddressString(),
        nullable=False,
    )

    paused: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    held_value: Mapped[int] = mapped_column(
        AmountString(),
        nullable=False,
        default=0,
    )

    # seq of the last journal event written for this ledger
    last_event_seq: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # Operating policy, fixed when the ledger is opened
    require_participant_caller: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    min_participants: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    pause_blocks_withdrawals: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    @property
    def policy(self) -> LedgerPolicy:
        return LedgerPolicy(
            require_participant_caller=self.require_participant_caller,
            min_participants=self.min_participants,
            pause_blocks_withdrawals=self.pause_blocks_withdrawals,
        )

    def __repr__(self) -> str:
        state = "paused" if self.paused else "active"
        return f"<LedgerRecord {self.ledger_code}: owner={self.owner} {state}>"
