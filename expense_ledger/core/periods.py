# expense_ledger/core/periods.py
from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Optional, Tuple


class FilterKind(str, Enum):
    ALL = "all"
    THIS_WEEK = "week"
    THIS_MONTH = "month"

    @property
    def label(self) -> str:
        return {
            FilterKind.ALL: "All",
            FilterKind.THIS_WEEK: "This Week",
            FilterKind.THIS_MONTH: "This Month",
        }[self]


def week_start(reference: date) -> date:
    """Monday on or before *reference* (ISO weeks, so Sunday belongs to the prior Monday)."""
    return reference - timedelta(days=reference.weekday())


def month_start(reference: date) -> date:
    return reference.replace(day=1)


def date_range(
    kind: FilterKind, reference: date
) -> Tuple[Optional[date], Optional[date]]:
    """Return the inclusive ``(start, end)`` bounds for *kind* at *reference*.

    ``None`` means the side is unbounded.
    """
    kind = FilterKind(kind)
    if kind is FilterKind.ALL:
        return None, None
    if kind is FilterKind.THIS_WEEK:
        return week_start(reference), reference
    if kind is FilterKind.THIS_MONTH:
        return month_start(reference), reference
    raise ValueError(f"Unsupported filter '{kind}'.")
