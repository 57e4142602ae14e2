"""Database layer - engine, base classes and column types."""

from splitter_kernel.db.base import UUID, AddressString, AmountString, Base, TimestampedBase, UUIDString
from splitter_kernel.db.engine import create_tables, get_engine, get_session, session_scope

__all__ = [
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "Base",
    "TimestampedBase",
    "UUIDString",
    "AddressString",
    "AmountString",
    "UUID",
]
