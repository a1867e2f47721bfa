"""
Unit of Work - commits everything the repositories staged in one transaction.
"""

from sqlalchemy.orm import Session

from shared.infrastructure.db import safe_commit


class UnitOfWork:
    """Commit boundary for the request session."""

    def __init__(self, db: Session):
        self._db = db

    def complete(self) -> None:
        """Commit staged changes; rolls back and re-raises on failure."""
        safe_commit(self._db)


def get_unit_of_work(db: Session) -> UnitOfWork:
    """Factory function for dependency injection."""
    return UnitOfWork(db)
