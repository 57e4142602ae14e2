"""
Module: splitter_kernel.db.base
Responsibility: Declarative base classes for all SQLAlchemy ORM models.  Provides
    the UUID primary key convention, the column types that carry domain values
    (Address, integer amounts) across every backend, and the TimestampedBase
    mixin.
Architecture position: Kernel > DB.  Lowest-level import target within the
    kernel's persistence side.  ALL model files import from here.  This module
    MUST NOT import from models/ or services/.

Invariants enforced:
    - UUID primary keys: every model inherits a uuid4-generated primary key.
    - Exact amounts: AmountString stores integers as decimal strings so values
      wider than 64 bits (token amounts in the smallest unit routinely are)
      round-trip exactly on SQLite and PostgreSQL alike.  NEVER store amounts
      as float.
    - Normalized identities: AddressString stores the lower-case form produced
      by the Address value object.
"""

from datetime import datetime
from typing import ClassVar
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from splitter_kernel.domain.identity import Address


class UUIDString(TypeDecorator):
    """
    UUID type stored as String(36) for cross-database portability.

    Guarantees:
        - process_bind_param: UUID -> str on INSERT/UPDATE.
        - process_result_value: str -> UUID on SELECT.
    """

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(value)
        return None

    def process_result_value(self, value, dialect):
        if value is not None:
            return PyUUID(value)
        return None


class AddressString(TypeDecorator):
    """Address value object stored as its 42-character hex string."""

    impl = String(42)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Address.parse(value))

    def process_result_value(self, value, dialect):
        if value is not None:
            return Address(value)
        return None


class AmountString(TypeDecorator):
    """
    Non-negative integer amount stored as a decimal string.

    78 digits covers the full uint256 range.
    """

    impl = String(78)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Amount must be int, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"Amount must be non-negative, got {value}")
        return str(value)

    def process_result_value(self, value, dialect):
        if value is not None:
            return int(value)
        return None


class Base(DeclarativeBase):
    """
    Declarative base for all SQLAlchemy models.

    Guarantees:
        - id is always a uuid4-generated UUID stored as String(36).
        - datetime maps to DateTime(timezone=True).
        - Address maps to AddressString.
    """

    type_annotation_map: ClassVar[dict] = {
        datetime: DateTime(timezone=True),
        PyUUID: UUIDString(),
        Address: AddressString(),
    }

    id: Mapped[PyUUID] = mapped_column(
        UUIDString(),
        primary_key=True,
        default=uuid4,
    )


class TimestampedBase(Base):
    """
    Abstract base with creation and modification timestamps.

    Guarantees:
        - created_at is set to server NOW() on INSERT and never changes.
        - updated_at is set on INSERT and refreshed on every UPDATE.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


# Re-export UUID for convenience
UUID = PyUUID
