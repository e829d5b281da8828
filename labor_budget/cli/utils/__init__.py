"""CLI utility functions."""

from labor_budget.cli.utils.formatters import (
    format_currency,
    format_error,
    format_hours,
    format_info,
    format_percentage,
    format_success,
    format_table,
    format_warning,
)

__all__ = [
    "format_currency",
    "format_error",
    "format_hours",
    "format_info",
    "format_percentage",
    "format_success",
    "format_table",
    "format_warning",
]
