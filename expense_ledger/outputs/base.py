# expense_ledger/outputs/base.py
from abc import ABC, abstractmethod

class BaseOutput(ABC):
    @abstractmethod
    def export(self, expenses, label="all"):
        """Write expenses to the chosen sink and return the written path."""
        pass
