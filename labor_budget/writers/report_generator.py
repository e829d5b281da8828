"""Report generator for creating formatted output DataFrames.

This module turns the calculator results (productivity report, cost report,
evolution series) into DataFrames with display column names, ready to be
printed or written to CSV/XLSX.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List

import pandas as pd

from labor_budget.aggregators.evolution_series import EvolutionPoint
from labor_budget.calculators.cost_reconciler import MonthlyCostReport
from labor_budget.calculators.productivity import ProductivityReport

PRODUCTIVITY_COLUMNS = [
    "Codigo",
    "Descricao",
    "Unidade",
    "Qtd Executada",
    "Horas Utilizadas",
    "Produtividade Real",
    "Produtividade Prevista",
    "Desvio",
    "Status",
]

COST_COLUMNS = [
    "Codigo",
    "Descricao",
    "Custo Previsto",
    "Custo Medido",
    "Desvio",
]

EVOLUTION_COLUMNS = [
    "Mes",
    "Custo Previsto",
    "Custo Medido",
    "Custo Folha",
    "Custo Previsto Acum",
    "Custo Medido Acum",
    "Custo Folha Acum",
    "Horas Previstas",
    "Horas Medidas",
    "Horas Previstas Acum",
    "Horas Medidas Acum",
]

CENT = Decimal("0.01")
MILLI = Decimal("0.001")


def _money(value: Decimal) -> float:
    return float(value.quantize(CENT, rounding=ROUND_HALF_UP))


def _ratio(value: Decimal) -> float:
    return float(value.quantize(MILLI, rounding=ROUND_HALF_UP))


class ReportGenerator:
    """Generate display DataFrames from calculator results.

    Money is rounded to cents and productivity ratios to three decimals; the
    engine values themselves are never rounded.

    Example:
        >>> generator = ReportGenerator()
        >>> df = generator.productivity_frame(analyzer.analyze("2024-01"))
        >>> df["Status"].iloc[0]
        'Eficiente'
    """

    def productivity_frame(self, report: ProductivityReport, ranked_only: bool = True) -> pd.DataFrame:
        """Productivity table, the ranking by default or every item."""
        rows = [
            {
                "Codigo": p.item.code,
                "Descricao": p.item.description,
                "Unidade": p.item.unit,
                "Qtd Executada": float(p.executed_quantity),
                "Horas Utilizadas": float(p.hours_used),
                "Produtividade Real": _ratio(p.realized_productivity),
                "Produtividade Prevista": _ratio(p.predicted_productivity),
                "Desvio": _ratio(p.deviation),
                "Status": p.status_label,
            }
            for p in (report.ranked if ranked_only else report.items)
        ]
        return pd.DataFrame(rows, columns=PRODUCTIVITY_COLUMNS)

    def cost_frame(self, report: MonthlyCostReport, active_only: bool = True) -> pd.DataFrame:
        """Cost table, items with any cost by default or every item."""
        rows = [
            {
                "Codigo": c.item.code,
                "Descricao": c.item.description,
                "Custo Previsto": _money(c.predicted_cost),
                "Custo Medido": _money(c.measured_cost),
                "Desvio": _money(c.deviation),
            }
            for c in (report.active_items if active_only else report.items)
        ]
        return pd.DataFrame(rows, columns=COST_COLUMNS)

    def cost_summary_frame(self, report: MonthlyCostReport) -> pd.DataFrame:
        """One-row summary of the month: totals and HR figures."""
        return pd.DataFrame(
            [
                {
                    "Mes": report.month,
                    "Custo Previsto": _money(report.total_predicted_cost),
                    "Custo Medido": _money(report.total_measured_cost),
                    "Custo Real (Folha)": _money(report.actual_cost),
                    "Horas RH": float(report.hr_hours),
                    "Custo Indireto": _money(report.indirect_cost),
                }
            ]
        )

    def evolution_frame(self, points: List[EvolutionPoint]) -> pd.DataFrame:
        """Evolution table, one row per month."""
        rows = [
            [
                p.month,
                _money(p.month_predicted_cost),
                _money(p.month_measured_cost),
                _money(p.month_payroll_cost),
                _money(p.acc_predicted_cost),
                _money(p.acc_measured_cost),
                _money(p.acc_payroll_cost),
                float(p.month_predicted_hours),
                float(p.month_measured_hours),
                float(p.acc_predicted_hours),
                float(p.acc_measured_hours),
            ]
            for p in points
        ]
        return pd.DataFrame(rows, columns=EVOLUTION_COLUMNS)
