"""Productivity analysis: realized versus predicted hours per executed unit.

For a month, each budget item's realized productivity (hours used per unit
actually executed) is compared with its predicted productivity (planned hours
per planned unit, or the lifetime estimate when the month has no plan).
Lower is better: an item is efficient when realized <= predicted.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List

from labor_budget.calculators.budget_consumption import (
    hours_consumed,
    hours_logged_in_month,
)
from labor_budget.calculators.monthly_projection import planned_for
from labor_budget.calculators.number_utils import ZERO, safe_divide, sum_decimals
from labor_budget.models.budget import BudgetItem
from labor_budget.models.snapshot import ProjectSnapshot

logger = logging.getLogger(__name__)

DEFAULT_RANKING_SIZE = 5

EFFICIENT_LABEL = "Eficiente"
BELOW_TARGET_LABEL = "Abaixo da Meta"


@dataclass(frozen=True)
class ItemProductivity:
    """Productivity figures of one budget item for one month.

    Attributes:
        item: The budget item
        executed_quantity: Quantity measured as executed in the month
        hours_used: Hours logged on the item in the month (both roles)
        realized_productivity: hours_used / executed_quantity (0 if nothing
            was executed)
        predicted_productivity: Planned hours per planned unit
        deviation: realized - predicted (negative is better than planned)
    """

    item: BudgetItem
    executed_quantity: Decimal
    hours_used: Decimal
    realized_productivity: Decimal
    predicted_productivity: Decimal
    deviation: Decimal

    @property
    def is_efficient(self) -> bool:
        return self.realized_productivity <= self.predicted_productivity

    @property
    def status_label(self) -> str:
        return EFFICIENT_LABEL if self.is_efficient else BELOW_TARGET_LABEL


@dataclass(frozen=True)
class ProductivityReport:
    """Productivity of every budget item for a month.

    Attributes:
        month: Month key
        items: Figures of every budget item, in budget order
        ranked: Items with executed quantity, by executed quantity
            descending, truncated to the ranking size
        total_predicted_hours: Planned hours of all items in the month
        total_logged_hours: Every hour logged in the month
    """

    month: str
    items: List[ItemProductivity]
    ranked: List[ItemProductivity]
    total_predicted_hours: Decimal
    total_logged_hours: Decimal


class ProductivityAnalyzer:
    """Derives and ranks per-item productivity for a month.

    Example:
        >>> analyzer = ProductivityAnalyzer(snapshot)
        >>> report = analyzer.analyze("2024-01")
        >>> report.ranked[0].status_label
        'Eficiente'
    """

    def __init__(
        self, snapshot: ProjectSnapshot, ranking_size: int = DEFAULT_RANKING_SIZE
    ):
        self.snapshot = snapshot
        self.ranking_size = ranking_size

    def item_productivity(self, item: BudgetItem, month: str) -> ItemProductivity:
        """Compute productivity figures of a single item for a month."""
        log = self.snapshot.find_quantitative_log(item.id, month)
        executed = log.executed_quantity if log else ZERO
        hours_used = hours_consumed(self.snapshot, item.id, month=month)

        realized = safe_divide(hours_used, executed)
        predicted = self.predicted_productivity(item, month)

        return ItemProductivity(
            item=item,
            executed_quantity=executed,
            hours_used=hours_used,
            realized_productivity=realized,
            predicted_productivity=predicted,
            deviation=realized - predicted,
        )

    def predicted_productivity(self, item: BudgetItem, month: str) -> Decimal:
        """Predicted hours per unit for an item.

        Uses the month's planned figures when the plan has a quantity, falls
        back to the item's lifetime estimates otherwise.
        """
        planned = planned_for(self.snapshot, item.id, month)
        if planned.quantity > ZERO:
            return planned.total_hours / planned.quantity
        return safe_divide(item.total_estimated_hours, item.quantity)

    def analyze(self, month: str) -> ProductivityReport:
        """Build the productivity report of a month.

        Args:
            month: Month key ("YYYY-MM")

        Returns:
            ProductivityReport with the full item list and the ranking
        """
        items = [self.item_productivity(item, month) for item in self.snapshot.budget]

        executed = [p for p in items if p.executed_quantity > ZERO]
        ranked = sorted(executed, key=lambda p: p.executed_quantity, reverse=True)

        total_predicted = sum_decimals(
            planned_for(self.snapshot, item.id, month).total_hours
            for item in self.snapshot.budget
        )

        report = ProductivityReport(
            month=month,
            items=items,
            ranked=ranked[: self.ranking_size],
            total_predicted_hours=total_predicted,
            total_logged_hours=hours_logged_in_month(self.snapshot, month),
        )
        logger.debug(
            f"Productivity for {month}: {len(executed)} of {len(items)} items executed"
        )
        return report
