"""Budget spreadsheet reader.

Budgets are usually prepared in a spreadsheet. This module reads the first
sheet of an XLSX workbook (or a CSV file) and turns every usable row into a
BudgetItem. Column headers are matched against a list of accepted aliases, so
sheets written with or without Portuguese accents are both understood.

Expected layout:
```
Codigo | Descricao | Unidade | Quantidade | ValorPrevisto | HorasProfissional | HorasServente
-------|-----------|---------|------------|---------------|-------------------|--------------
1.1    | Alvenaria | m2      | 100        | 5000.00       | 50                | 80
```
"""

import logging
import uuid
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd
from pydantic import ValidationError

from labor_budget.models.base import to_decimal
from labor_budget.models.budget import BudgetItem

logger = logging.getLogger(__name__)

# BudgetItem field -> accepted headers, first match wins
COLUMN_ALIASES: Dict[str, Tuple[str, ...]] = {
    "code": ("Codigo", "Código", "Item"),
    "description": ("Descricao", "Descrição", "Descriçao"),
    "unit": ("Unidade",),
    "quantity": ("Quantidade", "Qtd"),
    "estimated_value": ("ValorPrevisto", "Valor"),
    "estimated_prof_hours": ("HorasProfissional", "HorasProf"),
    "estimated_serv_hours": ("HorasServente", "HorasServ"),
}

NUMERIC_FIELDS = (
    "quantity",
    "estimated_value",
    "estimated_prof_hours",
    "estimated_serv_hours",
)

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


class BudgetImportError(Exception):
    """Raised when a budget spreadsheet cannot be read."""


class BudgetReader:
    """Reads budget items from XLSX or CSV files.

    Rows without a code or a description are skipped, blank numbers count as
    zero and a blank unit becomes "un". Rows whose numbers cannot be parsed
    are skipped with a warning.

    Example:
        >>> reader = BudgetReader()
        >>> items = reader.read("orcamento.xlsx")
        >>> items[0].code
        '1.1'
    """

    def read(self, file_path: Union[str, Path]) -> List[BudgetItem]:
        """Read budget items from a spreadsheet file.

        Args:
            file_path: Path to an .xlsx/.xls or .csv file

        Returns:
            Budget items in sheet order

        Raises:
            BudgetImportError: If the file is missing or cannot be parsed
        """
        path = Path(file_path)
        if not path.exists():
            raise BudgetImportError(f"Budget file not found: {path}")

        try:
            if path.suffix.lower() in EXCEL_SUFFIXES:
                df = pd.read_excel(path, sheet_name=0, dtype=str)
            else:
                df = pd.read_csv(path, dtype=str, encoding="utf-8-sig")
        except Exception as e:
            logger.error(f"Failed to read budget file {path}: {e}")
            raise BudgetImportError(f"Cannot read budget file {path}: {e}") from e

        items = self.parse_dataframe(df)
        logger.info(f"Read {len(items)} budget item(s) from {path} ({len(df)} rows)")
        return items

    def parse_dataframe(self, df: pd.DataFrame) -> List[BudgetItem]:
        """Convert a sheet DataFrame into budget items."""
        columns = self._resolve_columns(df)
        items = []
        for index, row in df.iterrows():
            item = self._parse_row(row, columns, index)
            if item is not None:
                items.append(item)
        return items

    def _resolve_columns(self, df: pd.DataFrame) -> Dict[str, str]:
        """Map each BudgetItem field to the sheet column holding it."""
        headers = {str(c).strip(): c for c in df.columns}
        columns = {}
        for field, aliases in COLUMN_ALIASES.items():
            for alias in aliases:
                if alias in headers:
                    columns[field] = headers[alias]
                    break
        return columns

    def _parse_row(
        self, row: pd.Series, columns: Dict[str, str], index: Any
    ) -> Optional[BudgetItem]:
        values = {field: _cell_text(row.get(column)) for field, column in columns.items()}

        code = values.get("code", "")
        description = values.get("description", "")
        if not code or not description:
            logger.debug(f"Skipping row {index}: missing code or description")
            return None

        try:
            numbers = {field: _cell_number(values.get(field, "")) for field in NUMERIC_FIELDS}
            return BudgetItem(
                id=str(uuid.uuid4()),
                code=code,
                description=description,
                unit=values.get("unit") or "un",
                **numbers,
            )
        except (ValueError, ValidationError) as e:
            logger.warning(f"Skipping budget row {index} ({code}): {e}")
            return None


def _cell_text(value: Any) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()


def _cell_number(text: str) -> Decimal:
    if not text:
        return Decimal("0")
    return to_decimal(text)
