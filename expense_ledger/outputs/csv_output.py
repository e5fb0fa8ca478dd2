# expense_ledger/outputs/csv_output.py

import os
import csv
from expense_ledger.outputs.base import BaseOutput
from expense_ledger.core.validation import format_amount


class CSVOutput(BaseOutput):
    """
    Writes expenses to Expenses-<label>.csv in the order they were queried
    (newest first), followed by a TOTAL row.
    """
    def __init__(self, config):
        self.config     = config
        self.output_dir = config.get('output_dir', 'data')
        os.makedirs(self.output_dir, exist_ok=True)

    def export(self, expenses, label="all"):
        out_path = os.path.join(self.output_dir, f"Expenses-{label}.csv")

        total = 0.0
        with open(out_path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['id', 'date', 'category', 'note', 'amount'])
            for exp in expenses:
                writer.writerow([
                    exp.id,
                    exp.date.isoformat(),
                    exp.category,
                    exp.note or '',
                    format_amount(exp.amount),
                ])
                total += exp.amount
            writer.writerow(['', '', 'TOTAL', '', format_amount(total)])

        return out_path
