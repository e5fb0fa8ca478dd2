from datetime import date

import pytest
import yaml
from click.testing import CliRunner

from expense_ledger.cli import main as cli
from expense_ledger.database import add_expense, query_expenses


def _invoke(tmp_path, *args, config=None, env=None):
    cfg_path = tmp_path / "config.yaml"
    if config is not None:
        with open(cfg_path, "w") as f:
            yaml.safe_dump(config, f)
    db_path = tmp_path / "ledger.db"
    runner = CliRunner()
    return runner.invoke(
        cli,
        ["--config", str(cfg_path), "--db", str(db_path), *args],
        env=env,
    )


def test_cli_add_list_totals(tmp_path):
    res = _invoke(tmp_path, "add", "12.5", "Food", "--note", "lunch")
    assert res.exit_code == 0, res.output
    res = _invoke(tmp_path, "add", "30", "Rent")
    assert res.exit_code == 0, res.output

    res = _invoke(tmp_path, "list")
    assert res.exit_code == 0, res.output
    assert "(lunch)" in res.output
    assert "Total (All): 42.50" in res.output
    assert "Rent: 30.00 (1)" in res.output

    res = _invoke(tmp_path, "totals", "--filter", "month")
    assert res.exit_code == 0, res.output
    assert "Total (This Month): 42.50" in res.output


def test_cli_rejects_invalid_amount(tmp_path):
    res = _invoke(tmp_path, "add", "abc", "Food")
    assert res.exit_code == 1
    assert "Amount must be a number" in res.output
    assert query_expenses(str(tmp_path / "ledger.db")) == []

    res = _invoke(tmp_path, "add", "5", "  ")
    assert res.exit_code == 1
    assert "Category is required" in res.output


def test_cli_edit_keeps_unspecified_fields(tmp_path):
    _invoke(tmp_path, "add", "12.5", "Food", "--note", "lunch")
    exp_id = query_expenses(str(tmp_path / "ledger.db"))[0].id

    res = _invoke(tmp_path, "edit", str(exp_id), "--amount", "20")
    assert res.exit_code == 0, res.output
    exp = query_expenses(str(tmp_path / "ledger.db"))[0]
    assert (exp.amount, exp.category, exp.note) == (20.0, "Food", "lunch")

    res = _invoke(tmp_path, "edit", str(exp_id), "--note", "")
    assert res.exit_code == 0, res.output
    assert query_expenses(str(tmp_path / "ledger.db"))[0].note is None


@pytest.mark.parametrize("amount", [12.345, 0.004, 0.00001, 1234.5678])
def test_cli_edit_preserves_unrounded_amount(tmp_path, amount):
    db_path = str(tmp_path / "ledger.db")
    add_expense(db_path, amount, "Food", "lunch", today=date(2024, 1, 5))
    before = query_expenses(db_path)[0]

    res = _invoke(tmp_path, "edit", str(before.id), "--category", "Books")
    assert res.exit_code == 0, res.output
    res = _invoke(tmp_path, "edit", str(before.id), "--note", "paperback")
    assert res.exit_code == 0, res.output

    after = query_expenses(db_path)[0]
    assert after.amount == amount
    assert (after.category, after.note) == ("Books", "paperback")
    assert (after.id, after.date) == (before.id, date(2024, 1, 5))


def test_cli_edit_unknown_id(tmp_path):
    res = _invoke(tmp_path, "edit", "42", "--amount", "5")
    assert res.exit_code == 1
    assert "No expense with id 42" in res.output


def test_cli_delete_twice(tmp_path):
    _invoke(tmp_path, "add", "5", "Food")
    exp_id = query_expenses(str(tmp_path / "ledger.db"))[0].id

    for _ in range(2):
        res = _invoke(tmp_path, "delete", str(exp_id))
        assert res.exit_code == 0, res.output

    res = _invoke(tmp_path, "list")
    assert "No expenses yet." in res.output


def test_cli_export_csv(tmp_path):
    out_dir = tmp_path / "out"
    config = {"output_dir": str(out_dir)}
    _invoke(tmp_path, "add", "5", "Food", config=config)

    res = _invoke(tmp_path, "export", "--filter", "week", "--output", "csv")
    assert res.exit_code == 0, res.output
    out_csv = out_dir / "Expenses-week.csv"
    assert out_csv.exists()
    lines = out_csv.read_text().splitlines()
    assert lines[0] == "id,date,category,note,amount"
    assert lines[-1] == ",,TOTAL,,5.00"


def test_cli_uses_default_filter_from_config(tmp_path):
    _invoke(tmp_path, "init", config={"default_filter": "week"})
    res = _invoke(tmp_path, "totals")
    assert res.exit_code == 0, res.output
    assert "Total (This Week): 0.00" in res.output


def test_cli_rejects_bad_default_filter(tmp_path):
    res = _invoke(tmp_path, "totals", config={"default_filter": "year"})
    assert res.exit_code == 1
    assert "Invalid default_filter 'year'" in res.output


def test_cli_rejects_bad_log_level(tmp_path):
    res = _invoke(tmp_path, "totals", env={"LEDGER_LOG_LEVEL": "chatty"})
    assert res.exit_code == 2
    assert "Unknown log level 'CHATTY'" in res.output


def test_cli_rejects_non_mapping_config(tmp_path):
    (tmp_path / "config.yaml").write_text("- a\n- b\n")
    res = _invoke(tmp_path, "totals")
    assert res.exit_code == 1
    assert "Could not read config" in res.output
