"""State behind the expense screen: active filter, edit session and totals.

A front end calls into :class:`LedgerScreen` in response to user actions and
renders its attributes. Every successful mutation is followed by a fresh query
under the active filter, so ``expenses`` always reflects the last completed
read. A failed mutation raises and leaves the screen untouched.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional

from expense_ledger import database
from expense_ledger.core.errors import LedgerError
from expense_ledger.core.models import EditSession, Expense
from expense_ledger.core.periods import FilterKind
from expense_ledger.core.validation import amount_text
from expense_ledger.summary import category_totals, overall_total

logger = logging.getLogger(__name__)


class LedgerScreen:
    def __init__(self, db_path: str, filter_kind: FilterKind = FilterKind.ALL):
        self.db_path = db_path
        self.filter_kind = FilterKind(filter_kind)
        self.editing: Optional[EditSession] = None
        self.expenses: List[Expense] = []
        self.total: float = 0.0
        self.categories: List[Dict[str, object]] = []

    def open(self, reference_date: date | None = None) -> "LedgerScreen":
        database.initialize(self.db_path)
        self.load(reference_date=reference_date)
        return self

    def load(
        self,
        filter_kind: FilterKind | None = None,
        reference_date: date | None = None,
    ) -> List[Expense]:
        kind = FilterKind(filter_kind) if filter_kind is not None else self.filter_kind
        rows = database.query_expenses(self.db_path, kind, reference_date)
        self.filter_kind = kind
        self.expenses = rows
        self.total = overall_total(rows)
        self.categories = category_totals(rows)
        return rows

    def set_filter(self, filter_kind: FilterKind, reference_date: date | None = None):
        return self.load(filter_kind, reference_date)

    def start_edit(self, expense_id: int) -> EditSession:
        exp = database.get_expense(self.db_path, expense_id)
        self.editing = EditSession(
            expense_id=exp.id,
            amount=amount_text(exp.amount),
            category=exp.category,
            note=exp.note or "",
        )
        return self.editing

    def cancel_edit(self) -> None:
        self.editing = None

    def submit(self, amount, category, note="", *, today: date | None = None) -> None:
        """Save the form: update the record in edit, or add a new one."""
        session = self.editing
        try:
            if session is None:
                database.add_expense(self.db_path, amount, category, note, today=today)
            else:
                database.update_expense(
                    self.db_path, session.expense_id, amount, category, note
                )
        except LedgerError as exc:
            logger.info("Rejected expense input: %s", exc)
            raise
        self.editing = None
        self.load(reference_date=today)

    def delete(self, expense_id: int, reference_date: date | None = None) -> None:
        database.remove_expense(self.db_path, expense_id)
        if self.editing is not None and self.editing.expense_id == expense_id:
            self.editing = None
        self.load(reference_date=reference_date)
