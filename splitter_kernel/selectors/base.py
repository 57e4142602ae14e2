"""
Module: splitter_kernel.selectors.base
Responsibility: Abstract base class for all read-only query selectors.  Selectors
    are the read side of the persisted ledger: they never create, modify, or
    delete data.
Architecture position: Kernel > Selectors.  May import from db/, models/ and
    domain value objects.  MUST NOT import from services/.

Invariants enforced:
    - Read-only access: selectors MUST NOT call session.add(), session.delete(),
      session.commit(), or session.flush().
    - DTO return convention: selectors return frozen dataclasses or domain
      values, NOT ORM model instances.
"""

from abc import ABC

from sqlalchemy.orm import Session


class BaseSelector(ABC):
    """Abstract base class for all selectors."""

    def __init__(self, session: Session):
        """
        Args:
            session: SQLAlchemy session owned by the caller.
        """
        self.session = session
