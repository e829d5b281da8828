"""Entity store: the single owner of the mutable project state.

Every mutation builds a new immutable ProjectSnapshot, swaps it in and hands
it to the repository (when one is attached). Calculators only ever see
snapshots, never the store.
"""

import datetime as dt
import logging
import uuid
from decimal import Decimal
from typing import Iterable, Optional

from labor_budget.calculators.daily_allocation import (
    DAILY_WORK_HOURS,
    DailyAllocationTracker,
)
from labor_budget.calculators.monthly_projection import (
    accumulated_percentage,
    upsert_plan,
)
from labor_budget.calculators.number_utils import HUNDRED, ZERO
from labor_budget.models.base import Number, to_decimal
from labor_budget.models.budget import BudgetItem, sort_budget
from labor_budget.models.logs import DailyLogEntry, FinancialRecord, QuantitativeLog
from labor_budget.models.project import Project
from labor_budget.models.snapshot import ProjectSnapshot
from labor_budget.models.team import Collaborator
from labor_budget.store.json_repository import JsonRepository

logger = logging.getLogger(__name__)


class EntityStore:
    """Holds the current snapshot and applies mutations to it.

    Example:
        >>> store = EntityStore.open("obra.json")
        >>> store.set_plan_percentage("b-1", "2024-01", 50)
        Decimal('50')
        >>> store.snapshot.find_plan("b-1", "2024-01").projected_percentage
        Decimal('50')
    """

    def __init__(
        self,
        snapshot: Optional[ProjectSnapshot] = None,
        repository: Optional[JsonRepository] = None,
        daily_limit: Decimal = DAILY_WORK_HOURS,
    ):
        """Initialize the store.

        Args:
            snapshot: Initial state, empty when omitted
            repository: Where to persist every change; in-memory when omitted
            daily_limit: Daily hour ceiling enforced on new entries
        """
        self._snapshot = snapshot or ProjectSnapshot()
        self.repository = repository
        self.daily_limit = to_decimal(daily_limit)

    @classmethod
    def open(cls, file_path, daily_limit: Decimal = DAILY_WORK_HOURS) -> "EntityStore":
        """Create a store backed by a JSON data file, loading its contents.

        Raises:
            StorageError: If the data file exists but cannot be loaded
        """
        repository = JsonRepository(file_path)
        return cls(repository.load(), repository, daily_limit)

    @property
    def snapshot(self) -> ProjectSnapshot:
        return self._snapshot

    def _commit(self, **changes) -> None:
        self._snapshot = self._snapshot.model_copy(update=changes)
        if self.repository is not None:
            self.repository.save(self._snapshot)

    # Project and team

    def set_project(self, project: Project) -> None:
        self._commit(project=project)
        logger.info(f"Project set: {project.name}")

    def add_collaborator(self, collaborator: Collaborator) -> None:
        self._commit(team=self._snapshot.team + (collaborator,))
        logger.info(f"Added collaborator {collaborator.name} ({collaborator.role})")

    def remove_collaborator(self, collaborator_id: str) -> None:
        """Remove a collaborator; their daily entries are kept."""
        self._commit(team=tuple(c for c in self._snapshot.team if c.id != collaborator_id))
        logger.info(f"Removed collaborator {collaborator_id}")

    # Budget

    def add_budget_item(self, item: BudgetItem) -> None:
        self.add_budget_items([item])

    def add_budget_items(self, items: Iterable[BudgetItem]) -> int:
        """Append items and keep the budget sorted by code.

        Returns:
            Number of items added
        """
        new_items = tuple(items)
        self._commit(budget=sort_budget(self._snapshot.budget + new_items))
        logger.info(f"Added {len(new_items)} budget item(s)")
        return len(new_items)

    def remove_budget_item(self, item_id: str) -> None:
        """Remove a budget item; records referencing it are kept."""
        self._commit(budget=tuple(b for b in self._snapshot.budget if b.id != item_id))
        logger.info(f"Removed budget item {item_id}")

    def clear_budget(self) -> None:
        self._commit(budget=())
        logger.info("Budget cleared")

    # Daily log

    def tracker(self) -> DailyAllocationTracker:
        """Daily allocation tracker over the current snapshot."""
        return DailyAllocationTracker(self._snapshot, self.daily_limit)

    def add_daily_entry(
        self,
        collaborator_id: str,
        item_id: str,
        hours: Number,
        date: dt.date,
        justification: Optional[str] = None,
    ) -> DailyLogEntry:
        """Log hours through the allocation gate.

        Raises:
            AllocationRejectedError: If the gate refuses the entry; the
                store is left unchanged
        """
        entry = self.tracker().build_entry(
            collaborator_id, item_id, hours, date, justification
        )
        self._commit(logs=self._snapshot.logs + (entry,))
        logger.info(
            f"Logged {entry.hours}h for {collaborator_id} on {date}"
            + (" (over budget)" if entry.justification else "")
        )
        return entry

    def remove_daily_entry(self, entry_id: str) -> None:
        self._commit(logs=tuple(e for e in self._snapshot.logs if e.id != entry_id))
        logger.info(f"Removed daily entry {entry_id}")

    # Monthly plans and measurements

    def set_plan_percentage(self, item_id: str, month: str, percentage: Number) -> Decimal:
        """Set the planned percentage of an item for a month.

        Returns:
            The item's accumulated planned percentage after the change
        """
        self._commit(plans=upsert_plan(self._snapshot.plans, item_id, month, percentage))
        total = accumulated_percentage(self._snapshot, item_id)
        if total > HUNDRED:
            logger.warning(f"Item {item_id} is planned at {total}% in total")
        return total

    def set_executed_quantity(self, item_id: str, month: str, quantity: Number) -> QuantitativeLog:
        """Record the executed quantity of an item for a month (floored at 0)."""
        executed = max(ZERO, to_decimal(quantity))
        logs = list(self._snapshot.quantitative_logs)
        for index, log in enumerate(logs):
            if log.budget_item_id == item_id and log.month == month:
                record = log.model_copy(update={"executed_quantity": executed})
                logs[index] = record
                break
        else:
            record = QuantitativeLog(
                id=str(uuid.uuid4()),
                month=month,
                budget_item_id=item_id,
                executed_quantity=executed,
            )
            logs.append(record)

        self._commit(quantitative_logs=tuple(logs))
        logger.info(f"Recorded {executed} executed for {item_id} in {month}")
        return record

    def save_financial_record(
        self,
        month: str,
        hr_hours: Number = ZERO,
        payroll_cost: Number = ZERO,
        indirect_cost: Number = ZERO,
    ) -> FinancialRecord:
        """Replace the financial record of a month.

        An existing record for the month keeps its id.
        """
        existing = self._snapshot.find_financial_record(month)
        record = FinancialRecord(
            id=existing.id if existing else str(uuid.uuid4()),
            month=month,
            hr_hours=hr_hours,
            payroll_cost=payroll_cost,
            indirect_cost=indirect_cost,
        )
        others = tuple(f for f in self._snapshot.financial_records if f.month != month)
        self._commit(financial_records=others + (record,))
        logger.info(f"Saved financial record for {month}")
        return record
