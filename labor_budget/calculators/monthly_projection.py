"""Monthly projection: planned quantity and hours from planned percentages.

A MonthlyPlan states which percentage of a budget item's total scope is
expected to be done in a month. This module turns that percentage into planned
quantity and hours, accumulates percentages across months and performs the
plan upsert used by the store.
"""

import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence, Tuple

from labor_budget.calculators.number_utils import (
    HUNDRED,
    ZERO,
    percentage_of,
    safe_divide,
    sum_decimals,
)
from labor_budget.models.base import Number, to_decimal
from labor_budget.models.logs import MonthlyPlan
from labor_budget.models.snapshot import ProjectSnapshot


@dataclass(frozen=True)
class PlannedFigures:
    """Planned quantity and hours of a budget item for one month.

    Attributes:
        quantity: Planned physical quantity
        prof_hours: Planned PROFISSIONAL hours
        serv_hours: Planned SERVENTE hours
    """

    quantity: Decimal = ZERO
    prof_hours: Decimal = ZERO
    serv_hours: Decimal = ZERO

    @property
    def total_hours(self) -> Decimal:
        return self.prof_hours + self.serv_hours


def planned_for(snapshot: ProjectSnapshot, item_id: str, month: str) -> PlannedFigures:
    """Planned figures of an item for a month.

    All values are zero when there is no plan for the pair or the item no
    longer exists.

    Example:
        >>> planned_for(snapshot, "b-1", "2024-01")
        PlannedFigures(quantity=Decimal('50'), prof_hours=Decimal('25'), serv_hours=Decimal('40'))
    """
    plan = snapshot.find_plan(item_id, month)
    item = snapshot.find_item(item_id)
    if plan is None or item is None:
        return PlannedFigures()

    pct = plan.projected_percentage
    return PlannedFigures(
        quantity=percentage_of(item.quantity, pct),
        prof_hours=percentage_of(item.estimated_prof_hours, pct),
        serv_hours=percentage_of(item.estimated_serv_hours, pct),
    )


def accumulated_percentage(snapshot: ProjectSnapshot, item_id: str) -> Decimal:
    """Sum of the planned percentages of an item over all months.

    The value is not clamped: above 100 means the item is over-planned.
    """
    return sum_decimals(
        plan.projected_percentage
        for plan in snapshot.plans
        if plan.budget_item_id == item_id
    )


def is_over_planned(snapshot: ProjectSnapshot, item_id: str) -> bool:
    """Whether an item's plans add up to more than 100%."""
    return accumulated_percentage(snapshot, item_id) > HUNDRED


def clamp_percentage(value: Number) -> Decimal:
    """Clamp a single-month percentage to [0, 100]."""
    return min(HUNDRED, max(ZERO, to_decimal(value)))


def upsert_plan(
    plans: Sequence[MonthlyPlan],
    item_id: str,
    month: str,
    percentage: Number,
    plan_id: Optional[str] = None,
) -> Tuple[MonthlyPlan, ...]:
    """Set the planned percentage of an item for a month.

    An existing plan for the exact (item, month) pair is replaced in place,
    keeping its id and position; otherwise a new plan is appended. The
    percentage is clamped to [0, 100].

    Args:
        plans: Current plans
        item_id: Budget item identifier
        month: Month key ("YYYY-MM")
        percentage: Projected percentage for the month
        plan_id: Id for a newly created plan (generated when omitted)

    Returns:
        New tuple of plans
    """
    pct = clamp_percentage(percentage)
    updated = list(plans)
    for index, plan in enumerate(updated):
        if plan.budget_item_id == item_id and plan.month == month:
            updated[index] = plan.model_copy(update={"projected_percentage": pct})
            return tuple(updated)

    updated.append(
        MonthlyPlan(
            id=plan_id or str(uuid.uuid4()),
            month=month,
            budget_item_id=item_id,
            projected_percentage=pct,
        )
    )
    return tuple(updated)


def executed_percentage(snapshot: ProjectSnapshot, item_id: str, month: str) -> Decimal:
    """Share of an item's total quantity executed in a month, in percent."""
    item = snapshot.find_item(item_id)
    log = snapshot.find_quantitative_log(item_id, month)
    if item is None or log is None:
        return ZERO
    return safe_divide(log.executed_quantity, item.quantity) * HUNDRED
