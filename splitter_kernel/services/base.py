"""
BaseService -- abstract base for all kernel services.

Responsibility:
    Provides the common constructor and session-handling contract for
    every write-side service.  Concrete services receive a SQLAlchemy
    ``Session`` and persist through ``session.flush()`` -- never
    ``session.commit()``.

Invariants enforced:
    ATOMIC_CALLS -- services flush within the caller's transaction and
        never commit or roll back themselves.  The caller (``session_scope``,
        the CLI, or a test) owns commit/rollback, which is what makes a
        rejected call leave no trace.
"""

from abc import ABC

from sqlalchemy.orm import Session


class BaseService(ABC):
    """
    Abstract base class for all kernel services.

    Guarantees:
        - The service never calls ``session.commit()`` or
          ``session.rollback()``.

    Non-goals:
        - Does NOT provide query-only (read) methods -- those belong in
          ``splitter_kernel/selectors/``.
    """

    def __init__(self, session: Session):
        """
        Args:
            session: SQLAlchemy session for database operations.
        """
        self.session = session
