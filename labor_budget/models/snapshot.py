"""Immutable snapshot of all project collections.

The analytics engine never reads ambient state: every calculator receives a
ProjectSnapshot and derives its values from it. Lookups return ``None`` when a
reference dangles; aggregations treat that as "no data".
"""

from typing import Optional, Tuple

from pydantic import Field

from labor_budget.models.base import BaseDataModel
from labor_budget.models.budget import BudgetItem
from labor_budget.models.logs import (
    DailyLogEntry,
    FinancialRecord,
    MonthlyPlan,
    QuantitativeLog,
)
from labor_budget.models.project import Project, Role
from labor_budget.models.team import Collaborator


class ProjectSnapshot(BaseDataModel):
    """Point-in-time view of the project and its six collections.

    Attributes:
        project: Project record, None before setup
        team: Collaborators
        budget: Budget items
        logs: Daily hour log entries
        plans: Monthly plans
        quantitative_logs: Monthly executed quantities
        financial_records: Monthly payroll records

    Example:
        >>> snapshot = ProjectSnapshot()
        >>> snapshot.find_item("missing") is None
        True
    """

    project: Optional[Project] = None
    team: Tuple[Collaborator, ...] = Field(default_factory=tuple)
    budget: Tuple[BudgetItem, ...] = Field(default_factory=tuple)
    logs: Tuple[DailyLogEntry, ...] = Field(default_factory=tuple)
    plans: Tuple[MonthlyPlan, ...] = Field(default_factory=tuple)
    quantitative_logs: Tuple[QuantitativeLog, ...] = Field(default_factory=tuple)
    financial_records: Tuple[FinancialRecord, ...] = Field(default_factory=tuple)

    def find_collaborator(self, collaborator_id: str) -> Optional[Collaborator]:
        return next((c for c in self.team if c.id == collaborator_id), None)

    def find_item(self, item_id: str) -> Optional[BudgetItem]:
        return next((b for b in self.budget if b.id == item_id), None)

    def role_of(self, collaborator_id: str) -> Optional[Role]:
        """Return the role of a collaborator, None if the id dangles."""
        collaborator = self.find_collaborator(collaborator_id)
        return collaborator.role if collaborator else None

    def find_plan(self, item_id: str, month: str) -> Optional[MonthlyPlan]:
        return next(
            (p for p in self.plans if p.budget_item_id == item_id and p.month == month),
            None,
        )

    def find_quantitative_log(
        self, item_id: str, month: str
    ) -> Optional[QuantitativeLog]:
        return next(
            (
                q
                for q in self.quantitative_logs
                if q.budget_item_id == item_id and q.month == month
            ),
            None,
        )

    def find_financial_record(self, month: str) -> Optional[FinancialRecord]:
        return next((f for f in self.financial_records if f.month == month), None)
