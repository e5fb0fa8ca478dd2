"""Errors raised by the ledger store."""


class LedgerError(Exception):
    """Base class for failed ledger operations. Nothing is written when raised."""


class ValidationError(LedgerError, ValueError):
    """Raised when an amount or category does not pass validation."""


class NotFoundError(LedgerError, LookupError):
    """Raised when an update or read targets an expense id that does not exist."""

    def __init__(self, expense_id):
        super().__init__(f"No expense with id {expense_id}")
        self.expense_id = expense_id
