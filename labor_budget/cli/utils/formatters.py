"""Output formatting utilities for CLI."""

from decimal import ROUND_HALF_UP, Decimal
from typing import List

import click


def format_success(message: str) -> str:
    """Format a success message with green color."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message with red color."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message with yellow color."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message with blue color."""
    return click.style(f"ℹ {message}", fg="blue")


def format_currency(value: Decimal) -> str:
    """Format a money amount in Brazilian notation.

    Example:
        >>> format_currency(Decimal("2650"))
        'R$ 2.650,00'
        >>> format_currency(Decimal("-12.5"))
        '-R$ 12,50'
    """
    amount = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    text = f"{abs(amount):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"-R$ {text}" if amount < 0 else f"R$ {text}"


def format_hours(value: Decimal) -> str:
    """Format hours without trailing zeros, e.g. ``8h`` or ``7.5h``."""
    number = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP).normalize()
    return f"{number:f}h"


def format_percentage(value: Decimal) -> str:
    number = Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{number}%"


def format_table(headers: List[str], rows: List[List[str]], max_width: int = 80) -> str:
    """Format data as a table.

    Args:
        headers: List of column headers
        rows: List of data rows (each row is a list of cell values)
        max_width: Maximum width for each column (default: 80)

    Returns:
        Formatted table as a string
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[: len(col_widths)]):
            col_widths[i] = max(col_widths[i], len(str(cell)))
    col_widths = [min(w, max_width) for w in col_widths]

    separator = "+" + "+".join("-" * (w + 2) for w in col_widths) + "+"

    def render(cells: List[str]) -> str:
        formatted = [
            f" {str(cell)[:width]:<{width}} " for cell, width in zip(cells, col_widths)
        ]
        return "|" + "|".join(formatted) + "|"

    lines = [separator, render(headers), separator]
    if rows:
        lines.extend(render(row) for row in rows)
        lines.append(separator)
    return "\n".join(lines)
