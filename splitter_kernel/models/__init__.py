"""ORM models for persisted splitter ledgers."""

from splitter_kernel.models.balance import BalanceRecord
from splitter_kernel.models.event import LedgerEventRecord
from splitter_kernel.models.ledger import LedgerRecord
from splitter_kernel.models.participant import ParticipantRecord

__all__ = [
    "LedgerRecord",
    "ParticipantRecord",
    "BalanceRecord",
    "LedgerEventRecord",
]
