"""Evolution series builder for cumulative (S-curve) reports.

This module merges every month that appears in the daily logs, monthly plans
and financial records into one timeline and computes, for each month, the
predicted and measured hours and cost summed over all budget items, the
payroll cost, and the running totals of each of them.
"""

import logging
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import List, Optional, Set

import pandas as pd

from labor_budget.calculators.budget_consumption import hours_consumed
from labor_budget.calculators.cost_reconciler import CostReconciler
from labor_budget.calculators.monthly_projection import planned_for
from labor_budget.calculators.number_utils import ZERO
from labor_budget.models.project import PROFISSIONAL, SERVENTE, ProjectRates
from labor_budget.models.snapshot import ProjectSnapshot
from labor_budget.utils.logging_utils import log_function_call

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvolutionPoint:
    """Monthly and cumulative values of one month of the timeline.

    Attributes:
        month: Month key ("YYYY-MM")
        month_predicted_cost: Planned cost of the month
        month_measured_cost: Measured cost of the month
        month_payroll_cost: Payroll cost reported by HR for the month
        acc_predicted_cost: Planned cost up to and including the month
        acc_measured_cost: Measured cost up to and including the month
        acc_payroll_cost: Payroll cost up to and including the month
        month_predicted_hours: Planned hours of the month
        month_measured_hours: Logged hours of the month
        acc_predicted_hours: Planned hours up to and including the month
        acc_measured_hours: Logged hours up to and including the month
    """

    month: str
    month_predicted_cost: Decimal
    month_measured_cost: Decimal
    month_payroll_cost: Decimal
    acc_predicted_cost: Decimal
    acc_measured_cost: Decimal
    acc_payroll_cost: Decimal
    month_predicted_hours: Decimal
    month_measured_hours: Decimal
    acc_predicted_hours: Decimal
    acc_measured_hours: Decimal


class EvolutionSeriesBuilder:
    """Builds the month-by-month evolution of hours and cost.

    The series is recomputed from the snapshot on every call.

    Example:
        >>> builder = EvolutionSeriesBuilder(snapshot)
        >>> points = builder.build()
        >>> [p.month for p in points]
        ['2024-01', '2024-02']
        >>> df = builder.to_dataframe(points)
    """

    def __init__(self, snapshot: ProjectSnapshot, rates: Optional[ProjectRates] = None):
        self.snapshot = snapshot
        self.reconciler = CostReconciler(snapshot, rates)
        self.rates = self.reconciler.rates

    def collect_months(self) -> List[str]:
        """Distinct months of logs, plans and financial records, ascending."""
        months: Set[str] = set()
        months.update(entry.month for entry in self.snapshot.logs)
        months.update(plan.month for plan in self.snapshot.plans)
        months.update(record.month for record in self.snapshot.financial_records)
        # "YYYY-MM" keys sort chronologically
        return sorted(months)

    @log_function_call
    def build(self) -> List[EvolutionPoint]:
        """Compute the evolution series.

        Returns:
            One EvolutionPoint per month of the timeline, in order
        """
        months = self.collect_months()
        logger.info(f"Building evolution series over {len(months)} months")

        acc_predicted_cost = ZERO
        acc_measured_cost = ZERO
        acc_payroll_cost = ZERO
        acc_predicted_hours = ZERO
        acc_measured_hours = ZERO

        points: List[EvolutionPoint] = []
        for month in months:
            month_predicted_cost = ZERO
            month_measured_cost = ZERO
            month_predicted_hours = ZERO
            month_measured_hours = ZERO

            for item in self.snapshot.budget:
                planned = planned_for(self.snapshot, item.id, month)
                measured_prof = hours_consumed(self.snapshot, item.id, PROFISSIONAL, month)
                measured_serv = hours_consumed(self.snapshot, item.id, SERVENTE, month)

                month_predicted_cost += (
                    planned.prof_hours * self.rates.prof
                    + planned.serv_hours * self.rates.serv
                )
                month_measured_cost += (
                    measured_prof * self.rates.prof + measured_serv * self.rates.serv
                )
                month_predicted_hours += planned.total_hours
                month_measured_hours += measured_prof + measured_serv

            month_payroll_cost = self.reconciler.actual_cost(month)

            acc_predicted_cost += month_predicted_cost
            acc_measured_cost += month_measured_cost
            acc_payroll_cost += month_payroll_cost
            acc_predicted_hours += month_predicted_hours
            acc_measured_hours += month_measured_hours

            points.append(
                EvolutionPoint(
                    month=month,
                    month_predicted_cost=month_predicted_cost,
                    month_measured_cost=month_measured_cost,
                    month_payroll_cost=month_payroll_cost,
                    acc_predicted_cost=acc_predicted_cost,
                    acc_measured_cost=acc_measured_cost,
                    acc_payroll_cost=acc_payroll_cost,
                    month_predicted_hours=month_predicted_hours,
                    month_measured_hours=month_measured_hours,
                    acc_predicted_hours=acc_predicted_hours,
                    acc_measured_hours=acc_measured_hours,
                )
            )

        return points

    def to_dataframe(self, points: List[EvolutionPoint]) -> pd.DataFrame:
        """Render an evolution series as a DataFrame indexed by month.

        Args:
            points: Series produced by ``build``

        Returns:
            DataFrame with one row per month and one column per value
        """
        if not points:
            logger.info("No evolution data, returning empty DataFrame")
            return pd.DataFrame()

        df = pd.DataFrame([asdict(point) for point in points]).set_index("month")
        return df.astype(float)
