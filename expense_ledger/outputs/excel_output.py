# expense_ledger/outputs/excel_output.py

"""Excel output module backed by XlsxWriter.

The workbook has an ``Expenses`` worksheet listing every queried expense as
an Excel table and a ``Summary`` worksheet with the per-category totals and a
grand total, computed with :mod:`expense_ledger.summary`.
"""

from __future__ import annotations

import os
import xlsxwriter

from expense_ledger.outputs.base import BaseOutput
from expense_ledger.summary import category_totals, overall_total


class ExcelOutput(BaseOutput):
    """Generate a local Excel workbook for a set of expenses."""

    EXPENSES = "Expenses"
    SUMMARY = "Summary"
    HEADERS = ["id", "date", "category", "note", "amount"]

    def __init__(self, config: dict):
        self.config = config
        self.output_dir = config.get("output_dir", "data")
        os.makedirs(self.output_dir, exist_ok=True)

    def export(self, expenses, label="all"):
        expenses = list(expenses)
        out_path = os.path.join(self.output_dir, f"Expenses-{label}.xlsx")

        workbook = xlsxwriter.Workbook(out_path)
        amount_fmt = workbook.add_format({"num_format": "$#,##0.00"})

        ws = workbook.add_worksheet(self.EXPENSES)
        ws.freeze_panes(1, 0)
        ws.write_row(0, 0, self.HEADERS)
        for row_idx, exp in enumerate(expenses, start=1):
            ws.write_row(row_idx, 0, [
                exp.id,
                exp.date.isoformat(),
                exp.category,
                exp.note or "",
            ])
            ws.write_number(row_idx, 4, exp.amount, amount_fmt)
        ws.set_column(4, 4, None, amount_fmt)
        if expenses:
            ws.add_table(0, 0, len(expenses), 4, {
                "columns": [{"header": h} for h in self.HEADERS]
            })

        summary_ws = workbook.add_worksheet(self.SUMMARY)
        summary_ws.freeze_panes(1, 0)
        summary_ws.set_column(1, 1, None, amount_fmt)
        summary_ws.write_row(0, 0, ["category", "total", "transactions"])
        row_idx = 1
        for item in category_totals(expenses):
            summary_ws.write(row_idx, 0, item["category"])
            summary_ws.write_number(row_idx, 1, item["total"], amount_fmt)
            summary_ws.write_number(row_idx, 2, item["transactions"])
            row_idx += 1
        summary_ws.write(row_idx, 0, "Grand Total")
        summary_ws.write_number(row_idx, 1, overall_total(expenses), amount_fmt)
        summary_ws.write_number(row_idx, 2, len(expenses))

        workbook.close()
        return out_path
