import logging
import sqlite3
from datetime import date
from pathlib import Path
from typing import List

from expense_ledger.core.errors import NotFoundError
from expense_ledger.core.models import Expense
from expense_ledger.core.periods import FilterKind, date_range
from expense_ledger.core.validation import clean_category, clean_note, parse_amount

logger = logging.getLogger(__name__)

_COLUMNS = "id, date, amount, category, note"


def _init_db(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS expenses (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            amount REAL NOT NULL CHECK (amount > 0),
            category TEXT NOT NULL CHECK (length(trim(category)) > 0),
            note TEXT,
            date TEXT NOT NULL
        )
        """
    )
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_expenses_date_id ON expenses (date, id)"
    )
    conn.commit()


def _connect(db_path: str) -> sqlite3.Connection:
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    _init_db(conn)
    return conn


def _row_to_expense(row) -> Expense:
    return Expense(
        id=int(row[0]),
        date=date.fromisoformat(row[1]),
        amount=float(row[2]),
        category=row[3],
        note=row[4],
    )


def _build_filters(
    start_date: date | None,
    end_date: date | None,
) -> tuple[str, list[str]]:
    conditions: list[str] = []
    params: list[str] = []
    if start_date:
        conditions.append("date >= ?")
        params.append(start_date.isoformat())
    if end_date:
        conditions.append("date <= ?")
        params.append(end_date.isoformat())
    where = " WHERE " + " AND ".join(conditions) if conditions else ""
    return where, params


def initialize(db_path: str) -> None:
    """Create the expenses table if it does not exist yet.

    Safe to call on every startup; existing rows are never touched.
    """
    conn = _connect(db_path)
    conn.close()


def add_expense(
    db_path: str,
    amount,
    category,
    note=None,
    *,
    today: date | None = None,
) -> None:
    """Record a new expense dated *today* (the local date by default).

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.
    amount:
        Positive amount, either a number or the raw text of an amount field.
    category:
        Category name; surrounding whitespace is removed.
    note:
        Optional note. Blank notes are stored as ``NULL``.
    today:
        Override for the date stamp.

    Raises :class:`~expense_ledger.core.errors.ValidationError` before any write
    when the amount or category is invalid.
    """
    value = parse_amount(amount)
    cat = clean_category(category)
    text = clean_note(note)
    stamp = (today or date.today()).isoformat()

    conn = _connect(db_path)
    try:
        cur = conn.execute(
            "INSERT INTO expenses (amount, category, note, date) VALUES (?, ?, ?, ?)",
            (value, cat, text, stamp),
        )
        conn.commit()
        logger.debug("Added expense %s: %.2f %s on %s", cur.lastrowid, value, cat, stamp)
    finally:
        conn.close()


def update_expense(db_path: str, expense_id: int, amount, category, note=None) -> None:
    """Replace the amount, category and note of an existing expense.

    The id and date of the record are left as they are. Validation runs first;
    :class:`~expense_ledger.core.errors.NotFoundError` is raised when no record
    has *expense_id*.
    """
    value = parse_amount(amount)
    cat = clean_category(category)
    text = clean_note(note)

    conn = _connect(db_path)
    try:
        cur = conn.execute(
            "UPDATE expenses SET amount = ?, category = ?, note = ? WHERE id = ?",
            (value, cat, text, int(expense_id)),
        )
        if cur.rowcount == 0:
            conn.rollback()
            raise NotFoundError(expense_id)
        conn.commit()
        logger.debug("Updated expense %s: %.2f %s", expense_id, value, cat)
    finally:
        conn.close()


def remove_expense(db_path: str, expense_id: int) -> None:
    """Delete an expense. Removing an id that does not exist is a no-op."""
    conn = _connect(db_path)
    try:
        cur = conn.execute("DELETE FROM expenses WHERE id = ?", (int(expense_id),))
        conn.commit()
        if cur.rowcount:
            logger.debug("Removed expense %s", expense_id)
    finally:
        conn.close()


def get_expense(db_path: str, expense_id: int) -> Expense:
    conn = _connect(db_path)
    try:
        row = conn.execute(
            f"SELECT {_COLUMNS} FROM expenses WHERE id = ?", (int(expense_id),)
        ).fetchone()
    finally:
        conn.close()
    if row is None:
        raise NotFoundError(expense_id)
    return _row_to_expense(row)


def query_expenses(
    db_path: str,
    filter_kind: FilterKind = FilterKind.ALL,
    reference_date: date | None = None,
) -> List[Expense]:
    """Return the expenses matching *filter_kind*, newest first.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.
    filter_kind:
        ``all``, ``week`` or ``month``. The week and month ranges end at
        *reference_date* inclusive, so future-dated rows are left out.
    reference_date:
        Day the range is evaluated against; defaults to today.

    Rows are ordered by date descending, then by id descending so the most
    recently added expense of a day comes first.
    """
    start_date, end_date = date_range(filter_kind, reference_date or date.today())
    conn = _connect(db_path)
    try:
        where, params = _build_filters(start_date, end_date)
        rows = conn.execute(
            f"SELECT {_COLUMNS} FROM expenses{where} ORDER BY date DESC, id DESC",
            params,
        ).fetchall()
        return [_row_to_expense(r) for r in rows]
    finally:
        conn.close()
