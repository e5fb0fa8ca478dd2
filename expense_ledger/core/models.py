# expense_ledger/core/models.py
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Expense:
    id: int
    date: date
    amount: float
    category: str
    note: Optional[str] = None


@dataclass(frozen=True)
class EditSession:
    """Form draft bound to an existing expense while it is being edited."""

    expense_id: int
    amount: str = ""
    category: str = ""
    note: str = ""
