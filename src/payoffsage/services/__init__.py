"""Service module exports."""

from . import amortization, budgeting, debts, goals, import_csv

__all__ = [
    "amortization",
    "budgeting",
    "debts",
    "goals",
    "import_csv",
]
