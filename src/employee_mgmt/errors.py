"""Exception types raised below the service facades."""

from __future__ import annotations


class DataAccessError(Exception):
    """A repository statement failed inside the database driver or engine."""

    def __init__(self, operation: str, detail: str | None = None):
        self.operation = operation
        self.detail = detail
        msg = f"Database operation failed: {operation}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class ConstraintViolationError(DataAccessError):
    """An insert or update violated a unique or foreign key."""
