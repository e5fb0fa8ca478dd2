# expense_ledger/summary.py
from collections import defaultdict
from typing import Dict, Iterable, List

from expense_ledger.core.models import Expense


def overall_total(expenses: Iterable[Expense]) -> float:
    return float(sum(exp.amount for exp in expenses))


def category_totals(expenses: Iterable[Expense]) -> List[Dict[str, object]]:
    """Aggregate spend totals grouped by category.

    Ordered by total descending; categories with equal totals are listed
    alphabetically.
    """
    totals: Dict[str, float] = defaultdict(float)
    counts: Dict[str, int] = defaultdict(int)
    for exp in expenses:
        totals[exp.category] += exp.amount
        counts[exp.category] += 1
    return [
        {
            "category": category,
            "total": total,
            "transactions": counts[category],
        }
        for category, total in sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    ]


def summarize(expenses: Iterable[Expense]) -> Dict[str, object]:
    expenses = list(expenses)
    return {
        "total": overall_total(expenses),
        "transactions": len(expenses),
        "categories": category_totals(expenses),
    }
