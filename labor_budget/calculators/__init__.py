"""Calculator modules for the labor budget engine."""

from labor_budget.calculators.budget_consumption import (
    hours_consumed,
    hours_logged_in_month,
)
from labor_budget.calculators.cost_reconciler import (
    CostReconciler,
    ItemCost,
    MonthlyCostReport,
)
from labor_budget.calculators.daily_allocation import (
    DAILY_WORK_HOURS,
    AllocationDecision,
    AllocationRejectedError,
    CollaboratorDay,
    DailyAllocationTracker,
    ItemHourBalance,
    RejectionReason,
)
from labor_budget.calculators.monthly_projection import (
    PlannedFigures,
    accumulated_percentage,
    clamp_percentage,
    executed_percentage,
    is_over_planned,
    planned_for,
    upsert_plan,
)
from labor_budget.calculators.number_utils import safe_divide, sum_decimals
from labor_budget.calculators.productivity import (
    ItemProductivity,
    ProductivityAnalyzer,
    ProductivityReport,
)

__all__ = [
    # budget_consumption
    "hours_consumed",
    "hours_logged_in_month",
    # cost_reconciler
    "CostReconciler",
    "ItemCost",
    "MonthlyCostReport",
    # daily_allocation
    "DAILY_WORK_HOURS",
    "AllocationDecision",
    "AllocationRejectedError",
    "CollaboratorDay",
    "DailyAllocationTracker",
    "ItemHourBalance",
    "RejectionReason",
    # monthly_projection
    "PlannedFigures",
    "accumulated_percentage",
    "clamp_percentage",
    "executed_percentage",
    "is_over_planned",
    "planned_for",
    "upsert_plan",
    # number_utils
    "safe_divide",
    "sum_decimals",
    # productivity
    "ItemProductivity",
    "ProductivityAnalyzer",
    "ProductivityReport",
]
