from __future__ import annotations

import anyio
from mcp.server.fastmcp import FastMCP

from dataclasses import asdict
from datetime import date

from pathlib import Path

from expense_ledger import database
from expense_ledger.core.periods import FilterKind
from expense_ledger.summary import summarize

server = FastMCP(name="Expense Ledger", instructions="Record and review personal expenses")


def _parse_reference(reference_date: str | None) -> date | None:
    try:
        return date.fromisoformat(reference_date) if reference_date else None
    except ValueError as exc:
        raise ValueError(f"Invalid reference_date: {reference_date}") from exc


def _parse_filter(filter_kind: str) -> FilterKind:
    try:
        return FilterKind(filter_kind)
    except ValueError as exc:
        choices = ", ".join(kind.value for kind in FilterKind)
        raise ValueError(f"Invalid filter_kind: {filter_kind} (expected one of {choices})") from exc


def _require_db(db_path: str) -> None:
    if not Path(db_path).exists():
        raise FileNotFoundError(f"Database not found: {db_path}")


def _serialize(expense) -> dict:
    row = asdict(expense)
    row["date"] = expense.date.isoformat()
    return row


@server.tool(
    name="list_expenses", description="List expenses for a time window, newest first"
)
async def list_expenses(
    db_path: str,
    filter_kind: str = "all",
    reference_date: str | None = None,
) -> list[dict]:
    """Return expenses from ``db_path`` matching ``filter_kind``.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.
    filter_kind:
        ``all``, ``week`` or ``month``.
    reference_date:
        Optional ISO date the week/month window ends on; defaults to today.
    """

    kind = _parse_filter(filter_kind)
    ref = _parse_reference(reference_date)
    _require_db(db_path)

    def _run() -> list[dict]:
        return [_serialize(e) for e in database.query_expenses(db_path, kind, ref)]

    return await anyio.to_thread.run_sync(_run)


@server.tool(name="add_expense", description="Record an expense dated today")
async def add_expense(
    db_path: str,
    amount: float,
    category: str,
    note: str | None = None,
) -> dict:
    def _run() -> None:
        database.add_expense(db_path, amount, category, note)

    await anyio.to_thread.run_sync(_run)
    return {"status": "added"}


@server.tool(
    name="update_expense",
    description="Replace the amount, category and note of an existing expense",
)
async def update_expense(
    db_path: str,
    expense_id: int,
    amount: float,
    category: str,
    note: str | None = None,
) -> dict:
    _require_db(db_path)

    def _run() -> None:
        database.update_expense(db_path, expense_id, amount, category, note)

    await anyio.to_thread.run_sync(_run)
    return {"status": "updated", "id": expense_id}


@server.tool(name="delete_expense", description="Delete an expense by id")
async def delete_expense(db_path: str, expense_id: int) -> dict:
    _require_db(db_path)

    def _run() -> None:
        database.remove_expense(db_path, expense_id)

    await anyio.to_thread.run_sync(_run)
    return {"status": "deleted", "id": expense_id}


@server.tool(
    name="expense_totals",
    description="Overall and per-category totals for a time window",
)
async def expense_totals(
    db_path: str,
    filter_kind: str = "all",
    reference_date: str | None = None,
) -> dict:
    kind = _parse_filter(filter_kind)
    ref = _parse_reference(reference_date)
    _require_db(db_path)

    def _run() -> dict:
        result = summarize(database.query_expenses(db_path, kind, ref))
        result["filter"] = kind.value
        return result

    return await anyio.to_thread.run_sync(_run)


def main() -> None:
    server.run()


if __name__ == "__main__":
    main()
