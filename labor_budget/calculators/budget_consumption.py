"""Budget consumption: hours logged against a budget item.

The same filter serves two purposes: the lifetime running total used by the
daily allocation gate, and the per-month figures used by the productivity and
cost reports.
"""

from decimal import Decimal
from typing import Optional

from labor_budget.calculators.number_utils import sum_decimals
from labor_budget.models.project import Role
from labor_budget.models.snapshot import ProjectSnapshot


def hours_consumed(
    snapshot: ProjectSnapshot,
    item_id: str,
    role: Optional[Role] = None,
    month: Optional[str] = None,
) -> Decimal:
    """Sum the hours logged on a budget item.

    Args:
        snapshot: Project snapshot to read
        item_id: Budget item identifier
        role: Only count hours of collaborators with this role; both roles
            when omitted
        month: Only count entries dated in this "YYYY-MM" month; all dates
            when omitted

    Returns:
        Total hours as a Decimal

    Note:
        An entry whose collaborator no longer exists has no role, so it only
        counts when ``role`` is omitted.

    Example:
        >>> hours_consumed(snapshot, "b-1", role="SERVENTE", month="2024-01")
        Decimal('15')
    """
    total = []
    for entry in snapshot.logs:
        if entry.budget_item_id != item_id:
            continue
        if month is not None and entry.month != month:
            continue
        if role is not None and snapshot.role_of(entry.collaborator_id) != role:
            continue
        total.append(entry.hours)
    return sum_decimals(total)


def hours_logged_in_month(snapshot: ProjectSnapshot, month: str) -> Decimal:
    """Sum every entry of a month, whatever item or collaborator it references.

    Example:
        >>> hours_logged_in_month(snapshot, "2024-01")
        Decimal('25')
    """
    return sum_decimals(entry.hours for entry in snapshot.logs if entry.month == month)
