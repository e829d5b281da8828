"""Data models for the labor budget tracker.

This package contains Pydantic models for all entities:
- BaseDataModel: Base class with common configuration
- Project / ProjectRates: Project setup and hourly rates per role
- Collaborator: Team member
- BudgetItem: Budget line with hour estimates per role
- DailyLogEntry, MonthlyPlan, QuantitativeLog, FinancialRecord: time series
- ProjectSnapshot: Immutable view over all collections
"""

from labor_budget.models.base import BaseDataModel
from labor_budget.models.budget import (
    BudgetItem,
    code_sort_key,
    compare_codes,
    sort_budget,
)
from labor_budget.models.logs import (
    DailyLogEntry,
    FinancialRecord,
    MonthlyPlan,
    QuantitativeLog,
    month_of,
    validate_month,
)
from labor_budget.models.project import (
    PROFISSIONAL,
    ROLES,
    SERVENTE,
    Project,
    ProjectRates,
    Role,
    resolve_rates,
)
from labor_budget.models.snapshot import ProjectSnapshot
from labor_budget.models.team import Collaborator

__all__ = [
    "BaseDataModel",
    "BudgetItem",
    "Collaborator",
    "DailyLogEntry",
    "FinancialRecord",
    "MonthlyPlan",
    "PROFISSIONAL",
    "Project",
    "ProjectRates",
    "ProjectSnapshot",
    "QuantitativeLog",
    "ROLES",
    "Role",
    "SERVENTE",
    "code_sort_key",
    "compare_codes",
    "month_of",
    "resolve_rates",
    "sort_budget",
    "validate_month",
]
