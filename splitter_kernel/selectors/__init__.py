"""Selectors for the splitter kernel (read side)."""

from splitter_kernel.selectors.ledger_selector import LedgerSelector, LedgerStatus

__all__ = [
    "LedgerSelector",
    "LedgerStatus",
]
