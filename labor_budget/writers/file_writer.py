"""Writes report DataFrames and the budget template to CSV or XLSX files."""

import logging
from pathlib import Path
from typing import Dict, Union

import pandas as pd

from labor_budget.readers.budget_reader import COLUMN_ALIASES

logger = logging.getLogger(__name__)

# First alias of each column, in sheet order
TEMPLATE_HEADERS = [aliases[0] for aliases in COLUMN_ALIASES.values()]

TEMPLATE_SAMPLE_ROW = ["1.1", "Alvenaria", "m2", 100, 5000.00, 50, 80]


class ReportWriteError(Exception):
    """Raised when an output file cannot be written."""


def budget_template_frame() -> pd.DataFrame:
    """Template sheet: the import headers and one sample row."""
    return pd.DataFrame([TEMPLATE_SAMPLE_ROW], columns=TEMPLATE_HEADERS)


def write_frames(frames: Dict[str, pd.DataFrame], file_path: Union[str, Path]) -> Path:
    """Write one or more DataFrames to a file.

    XLSX files get one sheet per entry (openpyxl engine). CSV files hold a
    single table, so only the first DataFrame is written.

    Args:
        frames: Sheet name -> DataFrame, in output order
        file_path: Target path; the suffix selects the format

    Returns:
        The written path

    Raises:
        ReportWriteError: If the suffix is unsupported or writing fails
    """
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix not in (".xlsx", ".csv"):
        raise ReportWriteError(f"Unsupported output format '{suffix}'. Use .xlsx or .csv")
    if not frames:
        raise ReportWriteError("Nothing to write")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if suffix == ".xlsx":
            with pd.ExcelWriter(path, engine="openpyxl") as writer:
                for sheet_name, df in frames.items():
                    df.to_excel(writer, sheet_name=sheet_name[:31], index=False)
        else:
            if len(frames) > 1:
                logger.warning(f"CSV holds one table, writing only the first of {len(frames)}")
            next(iter(frames.values())).to_csv(path, index=False)
    except OSError as e:
        raise ReportWriteError(f"Cannot write {path}: {e}") from e

    logger.info(f"Wrote {', '.join(frames)} to {path}")
    return path


def write_budget_template(file_path: Union[str, Path]) -> Path:
    """Write the budget import template (sheet "Orcamento")."""
    return write_frames({"Orcamento": budget_template_frame()}, file_path)
