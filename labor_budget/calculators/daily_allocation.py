"""Daily allocation tracking and the entry admission gate.

This module implements the only validation gate of the engine: before a new
daily log entry is accepted it must respect the daily work-hour ceiling of its
collaborator and, when it pushes the item/role consumption above the budgeted
hours, it must carry a justification.
"""

import datetime as dt
import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from labor_budget.calculators.budget_consumption import hours_consumed
from labor_budget.calculators.number_utils import ZERO, sum_decimals
from labor_budget.models.base import Number, to_decimal
from labor_budget.models.logs import DailyLogEntry
from labor_budget.models.project import Role
from labor_budget.models.snapshot import ProjectSnapshot

logger = logging.getLogger(__name__)

DAILY_WORK_HOURS = Decimal("8")


class RejectionReason(str, Enum):
    """Why a proposed daily entry was refused."""

    NON_POSITIVE_HOURS = "non_positive_hours"
    DAILY_LIMIT_EXCEEDED = "daily_limit_exceeded"
    JUSTIFICATION_REQUIRED = "justification_required"


@dataclass(frozen=True)
class AllocationDecision:
    """Outcome of evaluating a proposed daily entry.

    Attributes:
        allowed: Whether the entry may be created
        over_budget: Whether the entry pushes the item/role past its budget
        remaining_budget: Budgeted hours left for the item/role before the
            entry (negative once the budget is already exceeded)
        reason: Why the entry was refused, None when allowed
        message: Human readable explanation of the refusal
    """

    allowed: bool
    over_budget: bool
    remaining_budget: Decimal
    reason: Optional[RejectionReason] = None
    message: str = ""


@dataclass(frozen=True)
class ItemHourBalance:
    """Budgeted, consumed and remaining hours of an item for one role."""

    limit: Decimal
    consumed: Decimal
    remaining: Decimal


@dataclass(frozen=True)
class CollaboratorDay:
    """Hours a collaborator has logged on one day."""

    collaborator_id: str
    name: str
    logged_hours: Decimal
    remaining_hours: Decimal
    is_complete: bool


class AllocationRejectedError(ValueError):
    """Raised when asked to build an entry the gate refuses.

    Attributes:
        decision: The refusing AllocationDecision
    """

    def __init__(self, decision: AllocationDecision):
        self.decision = decision
        super().__init__(decision.message)


class DailyAllocationTracker:
    """Tracks daily hour allocation and admits new daily entries.

    Example:
        >>> tracker = DailyAllocationTracker(snapshot)
        >>> tracker.remaining_capacity("c-1", dt.date(2024, 1, 10))
        Decimal('8')
        >>> decision = tracker.evaluate_proposed_entry(
        ...     "c-1", "b-1", Decimal("3"), dt.date(2024, 1, 10)
        ... )
        >>> decision.allowed
        True
    """

    def __init__(
        self, snapshot: ProjectSnapshot, daily_limit: Decimal = DAILY_WORK_HOURS
    ):
        """Initialize the tracker.

        Args:
            snapshot: Project snapshot to read
            daily_limit: Maximum hours per collaborator per day
        """
        self.snapshot = snapshot
        self.daily_limit = to_decimal(daily_limit)

    def hours_logged_for(self, collaborator_id: str, date: dt.date) -> Decimal:
        """Sum the hours a collaborator logged on an exact date."""
        return sum_decimals(
            entry.hours
            for entry in self.snapshot.logs
            if entry.collaborator_id == collaborator_id and entry.date == date
        )

    def remaining_capacity(self, collaborator_id: str, date: dt.date) -> Decimal:
        """Hours the collaborator may still log on the date."""
        return self.daily_limit - self.hours_logged_for(collaborator_id, date)

    def consumed_hours_for_item(self, item_id: str, role: Role) -> Decimal:
        """Lifetime hours logged on an item by collaborators of a role."""
        return hours_consumed(self.snapshot, item_id, role=role)

    def item_balance(self, item_id: str, role: Role) -> Optional[ItemHourBalance]:
        """Budget balance of an item for a role, None if the item is unknown."""
        item = self.snapshot.find_item(item_id)
        if item is None:
            return None
        limit = item.estimated_hours_for(role)
        consumed = self.consumed_hours_for_item(item_id, role)
        return ItemHourBalance(limit=limit, consumed=consumed, remaining=limit - consumed)

    def evaluate_proposed_entry(
        self,
        collaborator_id: str,
        item_id: str,
        proposed_hours: Number,
        date: dt.date,
        justification: Optional[str] = None,
    ) -> AllocationDecision:
        """Decide whether a new daily entry may be created.

        Rules, in order:
        1. Hours must be positive.
        2. The collaborator's hours on the date may not exceed the daily limit.
        3. The entry is over budget when consumed + proposed hours exceed the
           item's estimate for the collaborator's role.
        4. An over-budget entry needs a non-blank justification.

        Args:
            collaborator_id: Collaborator logging the hours
            item_id: Budget item the hours are charged to
            proposed_hours: Hours to log
            date: Day of work
            justification: Reason for going over budget, if any

        Returns:
            AllocationDecision describing the outcome
        """
        hours = to_decimal(proposed_hours)
        if hours <= ZERO:
            return AllocationDecision(
                allowed=False,
                over_budget=False,
                remaining_budget=ZERO,
                reason=RejectionReason.NON_POSITIVE_HOURS,
                message=f"Hours must be positive, got {hours}",
            )

        logged = self.hours_logged_for(collaborator_id, date)
        if logged + hours > self.daily_limit:
            logger.info(
                f"Rejected {hours}h for {collaborator_id} on {date}: "
                f"{logged}h already logged"
            )
            return AllocationDecision(
                allowed=False,
                over_budget=False,
                remaining_budget=ZERO,
                reason=RejectionReason.DAILY_LIMIT_EXCEEDED,
                message=(
                    f"Collaborator cannot exceed {self.daily_limit} daily hours. "
                    f"Current hours: {logged}h"
                ),
            )

        role = self.snapshot.role_of(collaborator_id)
        balance = self.item_balance(item_id, role) if role is not None else None
        if balance is None:
            # Unknown collaborator or item: no budget to check against
            return AllocationDecision(
                allowed=True, over_budget=False, remaining_budget=ZERO
            )

        over_budget = balance.consumed + hours > balance.limit
        if over_budget and not (justification and justification.strip()):
            return AllocationDecision(
                allowed=False,
                over_budget=True,
                remaining_budget=balance.remaining,
                reason=RejectionReason.JUSTIFICATION_REQUIRED,
                message=(
                    "Justification is required because consumption exceeds "
                    f"the {balance.limit}h budgeted for this item ({role})"
                ),
            )

        return AllocationDecision(
            allowed=True, over_budget=over_budget, remaining_budget=balance.remaining
        )

    def build_entry(
        self,
        collaborator_id: str,
        item_id: str,
        hours: Number,
        date: dt.date,
        justification: Optional[str] = None,
        entry_id: Optional[str] = None,
    ) -> DailyLogEntry:
        """Create a new daily entry if the gate admits it.

        The justification is kept only when the entry is over budget.

        Raises:
            AllocationRejectedError: If the entry is refused
        """
        decision = self.evaluate_proposed_entry(
            collaborator_id, item_id, hours, date, justification
        )
        if not decision.allowed:
            raise AllocationRejectedError(decision)

        return DailyLogEntry(
            id=entry_id or str(uuid.uuid4()),
            date=date,
            collaborator_id=collaborator_id,
            budget_item_id=item_id,
            hours=to_decimal(hours),
            justification=justification.strip() if decision.over_budget else None,
        )

    def collaborator_day_summary(self, date: dt.date) -> List[CollaboratorDay]:
        """Logged and remaining hours of every collaborator on a date."""
        summary = []
        for collaborator in self.snapshot.team:
            logged = self.hours_logged_for(collaborator.id, date)
            summary.append(
                CollaboratorDay(
                    collaborator_id=collaborator.id,
                    name=collaborator.name,
                    logged_hours=logged,
                    remaining_hours=self.daily_limit - logged,
                    is_complete=logged == self.daily_limit,
                )
            )
        return summary
