"""
Module: splitter_kernel.models.balance
Responsibility: ORM persistence for the balance ledger -- the amount owed to
    each identity.  Rows are created on first credit and updated in place;
    a withdrawn balance is kept as a zero row.

Invariants enforced:
    - (ledger_id, address) is unique.
    - amount is a non-negative integer stored exactly (AmountString).
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from splitter_kernel.db.base import AddressString, AmountString, TimestampedBase, UUIDString
from splitter_kernel.domain.identity import Address


class BalanceRecord(TimestampedBase):
    """Amount owed by one ledger to one identity."""

    __tablename__ = "splitter_balances"

    __table_args__ = (
        UniqueConstraint("ledger_id", "address", name="uq_balance_address"),
        Index("idx_balance_ledger", "ledger_id"),
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

    amount: Mapped[int] = mapped_column(
        AmountString(),
        nullable=False,
        default=0,
    )

    def __repr__(self) -> str:
        return f"<BalanceRecord {self.address}: {self.amount}>"
