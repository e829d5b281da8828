"""Data readers for importing budget spreadsheets."""

from labor_budget.readers.budget_reader import (
    COLUMN_ALIASES,
    BudgetImportError,
    BudgetReader,
)

__all__ = ["BudgetReader", "BudgetImportError", "COLUMN_ALIASES"]
