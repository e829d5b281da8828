"""Business rule validators for project snapshots.

Snapshots loaded from disk or edited by hand may hold data the daily
allocation gate would have refused. These rules find such records and report
them without changing anything.
"""

from collections import Counter, defaultdict
from decimal import Decimal
from typing import Dict, Tuple

from labor_budget.calculators.monthly_projection import accumulated_percentage
from labor_budget.calculators.number_utils import HUNDRED, ZERO
from labor_budget.models.snapshot import ProjectSnapshot
from labor_budget.validators.validation_report import ValidationReport


class BusinessRuleValidators:
    """Collection of snapshot consistency checks.

    Every method reads the snapshot and appends its findings to the report.
    """

    @staticmethod
    def validate_daily_ceiling(
        snapshot: ProjectSnapshot, daily_limit: Decimal, report: ValidationReport
    ) -> None:
        """Report collaborators with more than ``daily_limit`` hours on a day."""
        per_day: Dict[Tuple[str, object], Decimal] = defaultdict(lambda: ZERO)
        for entry in snapshot.logs:
            per_day[(entry.collaborator_id, entry.date)] += entry.hours

        for (collaborator_id, date), hours in per_day.items():
            if hours > daily_limit:
                report.add_error(
                    "logs.hours",
                    f"{hours}h logged on one day exceeds the {daily_limit}h limit",
                    hours,
                    {"collaborator": collaborator_id, "date": date.isoformat()},
                )

    @staticmethod
    def validate_justifications(
        snapshot: ProjectSnapshot, report: ValidationReport
    ) -> None:
        """Report over-budget entries stored without a justification.

        Entries are replayed in stored order, accumulating hours per item and
        role; an entry is over budget when it pushes the running total past
        the item's estimate for the role.
        """
        consumed: Dict[Tuple[str, str], Decimal] = defaultdict(lambda: ZERO)
        for entry in snapshot.logs:
            role = snapshot.role_of(entry.collaborator_id)
            item = snapshot.find_item(entry.budget_item_id)
            if role is None or item is None:
                continue

            key = (item.id, role)
            limit = item.estimated_hours_for(role)
            over_budget = consumed[key] + entry.hours > limit
            consumed[key] += entry.hours

            if over_budget and not (entry.justification and entry.justification.strip()):
                report.add_error(
                    "logs.justification",
                    f"Entry exceeds the {limit}h budgeted for {item.code} ({role}) "
                    "without a justification",
                    entry.justification,
                    {"entry": entry.id, "date": entry.date.isoformat()},
                )

    @staticmethod
    def validate_plan_accumulation(
        snapshot: ProjectSnapshot, report: ValidationReport
    ) -> None:
        """Warn about items whose monthly plans add up to more than 100%."""
        for item in snapshot.budget:
            total = accumulated_percentage(snapshot, item.id)
            if total > HUNDRED:
                report.add_warning(
                    "plans.projected_percentage",
                    f"Item {item.code} is planned at {total}% in total",
                    total,
                    {"item": item.code},
                )

    @staticmethod
    def validate_unique_months(
        snapshot: ProjectSnapshot, report: ValidationReport
    ) -> None:
        """Report duplicated financial months and (item, month) records."""
        months = Counter(record.month for record in snapshot.financial_records)
        for month, count in months.items():
            if count > 1:
                report.add_error(
                    "financial_records.month",
                    f"{count} financial records for the same month",
                    month,
                    {"month": month},
                )

        collections = (
            ("plans", snapshot.plans),
            ("quantitative_logs", snapshot.quantitative_logs),
        )
        for name, records in collections:
            pairs = Counter((r.budget_item_id, r.month) for r in records)
            for (item_id, month), count in pairs.items():
                if count > 1:
                    report.add_error(
                        f"{name}.month",
                        f"{count} records for the same item and month",
                        month,
                        {"item": item_id, "month": month},
                    )

    @staticmethod
    def validate_references(
        snapshot: ProjectSnapshot, report: ValidationReport
    ) -> None:
        """Note records pointing at removed collaborators or budget items.

        Dangling references are legal: they contribute nothing to the reports.
        """
        for entry in snapshot.logs:
            if snapshot.find_collaborator(entry.collaborator_id) is None:
                report.add_info(
                    "logs.collaborator_id",
                    "Entry references a removed collaborator",
                    entry.collaborator_id,
                    {"entry": entry.id},
                )
            if snapshot.find_item(entry.budget_item_id) is None:
                report.add_info(
                    "logs.budget_item_id",
                    "Entry references a removed budget item",
                    entry.budget_item_id,
                    {"entry": entry.id},
                )

        for name, records in (
            ("plans", snapshot.plans),
            ("quantitative_logs", snapshot.quantitative_logs),
        ):
            for record in records:
                if snapshot.find_item(record.budget_item_id) is None:
                    report.add_info(
                        f"{name}.budget_item_id",
                        "Record references a removed budget item",
                        record.budget_item_id,
                        {"month": record.month},
                    )

    @staticmethod
    def validate_collaborator_dates(
        snapshot: ProjectSnapshot, report: ValidationReport
    ) -> None:
        """Warn about entries dated outside the collaborator's engagement."""
        for entry in snapshot.logs:
            collaborator = snapshot.find_collaborator(entry.collaborator_id)
            if collaborator is not None and not collaborator.is_active_on(entry.date):
                report.add_warning(
                    "logs.date",
                    f"{collaborator.name} was not on the team on {entry.date}",
                    entry.date.isoformat(),
                    {"entry": entry.id, "collaborator": collaborator.id},
                )
