# expense_ledger/core/validation.py
from __future__ import annotations

import math
import re
from decimal import Decimal

from expense_ledger.core.errors import ValidationError

_DECIMAL_TEXT = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


def parse_amount(value) -> float:
    """Return *value* as a positive finite float.

    Accepts numbers as well as the raw text typed into an amount field
    (``"12.50"``). Typed text must be plain decimal notation, so digit
    separators (``"1_000"``) and exponents (``"1e3"``) are rejected.
    Anything else raises :class:`ValidationError`.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"Amount must be a number, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not _DECIMAL_TEXT.match(value):
            raise ValidationError(f"Amount must be a number, got {value!r}")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Amount must be a number, got {value!r}") from None
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError(f"Amount must be greater than 0, got {value!r}")
    return amount


def clean_category(value) -> str:
    category = str(value or "").strip()
    if not category:
        raise ValidationError("Category is required")
    return category


def clean_note(value) -> str | None:
    note = str(value or "").strip()
    return note or None


def format_amount(amount: float) -> str:
    return f"{Decimal(str(amount)):.2f}"


def amount_text(amount: float) -> str:
    """Exact decimal text for *amount*, parseable by :func:`parse_amount`."""
    return format(Decimal(repr(float(amount))), "f")
