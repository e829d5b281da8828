"""Cost reconciliation: predicted, measured and actual labor cost.

Three views of the labor cost of a month are compared:
- predicted cost: planned hours priced at the project's role rates
- measured cost: logged hours priced at the same rates
- actual cost: the payroll cost reported by HR (project level, not per item)
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from labor_budget.calculators.budget_consumption import hours_consumed
from labor_budget.calculators.monthly_projection import planned_for
from labor_budget.calculators.number_utils import ZERO, sum_decimals
from labor_budget.models.budget import BudgetItem
from labor_budget.models.project import PROFISSIONAL, SERVENTE, ProjectRates, resolve_rates
from labor_budget.models.snapshot import ProjectSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemCost:
    """Predicted versus measured cost of one budget item for a month.

    Attributes:
        item: The budget item
        predicted_cost: Planned hours x role rates
        measured_cost: Logged hours x role rates
        deviation: predicted - measured (positive is under budget)
    """

    item: BudgetItem
    predicted_cost: Decimal
    measured_cost: Decimal
    deviation: Decimal

    @property
    def is_favorable(self) -> bool:
        return self.deviation >= ZERO


@dataclass(frozen=True)
class MonthlyCostReport:
    """Cost reconciliation of a month.

    Attributes:
        month: Month key
        items: Cost of every budget item, in budget order
        total_predicted_cost: Sum of predicted cost over all items
        total_measured_cost: Sum of measured cost over all items
        actual_cost: Payroll cost reported by HR (0 without a record)
        hr_hours: Hours reported by HR (0 without a record)
        indirect_cost: Indirect cost reported by HR (0 without a record)
    """

    month: str
    items: List[ItemCost]
    total_predicted_cost: Decimal
    total_measured_cost: Decimal
    actual_cost: Decimal
    hr_hours: Decimal
    indirect_cost: Decimal

    @property
    def active_items(self) -> List[ItemCost]:
        """Items with any predicted or measured cost in the month."""
        return [
            c for c in self.items if c.predicted_cost > ZERO or c.measured_cost > ZERO
        ]


class CostReconciler:
    """Reconciles predicted, measured and payroll cost.

    Example:
        >>> reconciler = CostReconciler(snapshot)
        >>> reconciler.predicted_cost("b-1", "2024-01")
        Decimal('2650')
    """

    def __init__(self, snapshot: ProjectSnapshot, rates: Optional[ProjectRates] = None):
        """Initialize the reconciler.

        Args:
            snapshot: Project snapshot to read
            rates: Hourly rates; resolved from the snapshot's project (with
                defaults) when omitted
        """
        self.snapshot = snapshot
        self.rates = rates or resolve_rates(snapshot.project)

    def predicted_cost(self, item_id: str, month: str) -> Decimal:
        planned = planned_for(self.snapshot, item_id, month)
        return planned.prof_hours * self.rates.prof + planned.serv_hours * self.rates.serv

    def measured_cost(self, item_id: str, month: str) -> Decimal:
        prof_hours = hours_consumed(self.snapshot, item_id, PROFISSIONAL, month)
        serv_hours = hours_consumed(self.snapshot, item_id, SERVENTE, month)
        return prof_hours * self.rates.prof + serv_hours * self.rates.serv

    def actual_cost(self, month: str) -> Decimal:
        """Payroll cost of the month, 0 when HR reported nothing."""
        record = self.snapshot.find_financial_record(month)
        return record.payroll_cost if record else ZERO

    def item_cost(self, item: BudgetItem, month: str) -> ItemCost:
        predicted = self.predicted_cost(item.id, month)
        measured = self.measured_cost(item.id, month)
        return ItemCost(
            item=item,
            predicted_cost=predicted,
            measured_cost=measured,
            deviation=predicted - measured,
        )

    def reconcile(self, month: str) -> MonthlyCostReport:
        """Build the cost report of a month."""
        items = [self.item_cost(item, month) for item in self.snapshot.budget]
        record = self.snapshot.find_financial_record(month)

        report = MonthlyCostReport(
            month=month,
            items=items,
            total_predicted_cost=sum_decimals(c.predicted_cost for c in items),
            total_measured_cost=sum_decimals(c.measured_cost for c in items),
            actual_cost=record.payroll_cost if record else ZERO,
            hr_hours=record.hr_hours if record else ZERO,
            indirect_cost=record.indirect_cost if record else ZERO,
        )
        logger.debug(
            f"Cost for {month}: predicted={report.total_predicted_cost} "
            f"measured={report.total_measured_cost} actual={report.actual_cost}"
        )
        return report
