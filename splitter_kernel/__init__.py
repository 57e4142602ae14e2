"""
Splitter Kernel

A two-way value splitter ledger with:
- An owner-administered participant registry
- Owner-controlled emergency pause
- Even two-way splits credited to a balance ledger
- Pull-based withdrawals, balance zeroed before value is released
- In-memory and SQLAlchemy-backed hosts with all-or-nothing calls
"""

__version__ = "0.1.0"
