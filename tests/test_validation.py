import math

import pytest

from expense_ledger.core.errors import LedgerError, ValidationError
from expense_ledger.core.validation import (
    amount_text,
    clean_category,
    clean_note,
    format_amount,
    parse_amount,
)


@pytest.mark.parametrize("value, expected", [
    (12.5, 12.5),
    (3, 3.0),
    ("12.50", 12.5),
    ("  7 ", 7.0),
])
def test_parse_amount_accepts_positive_numbers(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.parametrize("value", [
    0, -1, "0", "-3.5", "", "abc", None, True, math.nan, math.inf, "inf", "nan", [1],
    "1_000", "1e3", "12.5abc", "0x10", "1,000",
])
def test_parse_amount_rejects_invalid(value):
    with pytest.raises(ValidationError):
        parse_amount(value)


def test_validation_error_is_a_ledger_value_error():
    with pytest.raises(ValueError):
        parse_amount("x")
    with pytest.raises(LedgerError):
        clean_category("  ")


def test_clean_category_trims():
    assert clean_category("  Food ") == "Food"
    with pytest.raises(ValidationError, match="Category is required"):
        clean_category("")
    with pytest.raises(ValidationError):
        clean_category(None)


def test_clean_note_blank_is_none():
    assert clean_note("") is None
    assert clean_note("   ") is None
    assert clean_note(None) is None
    assert clean_note(" lunch ") == "lunch"


def test_format_amount():
    assert format_amount(20) == "20.00"
    assert format_amount(12.5) == "12.50"


@pytest.mark.parametrize("value, expected", [
    ("+4", 4.0),
    ("5.", 5.0),
    (".25", 0.25),
])
def test_parse_amount_plain_decimal_forms(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.parametrize("amount", [12.345, 0.004, 0.00001, 20.0, 1e16, 1234.5678])
def test_amount_text_parses_back_exactly(amount):
    text = amount_text(amount)
    assert "e" not in text.lower()
    assert parse_amount(text) == amount
