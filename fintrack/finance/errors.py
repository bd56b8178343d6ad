"""Mini README: Error types raised by the ledger core.

The ledger has a single failure mode: rejected input on ``Ledger.add``.
``ValidationError`` subclasses ``ValueError`` so callers that already guard
against bad values keep working, while the ``field`` attribute lets the
presentation layer highlight the offending form input.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when a new transaction fails a precondition check."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    def as_dict(self) -> dict:
        """Return a payload suitable for JSON error responses."""

        return {"field": self.field, "message": self.message}
