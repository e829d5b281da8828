"""Main validator orchestrator for project snapshots."""

import logging
from decimal import Decimal

from labor_budget.calculators.daily_allocation import DAILY_WORK_HOURS
from labor_budget.models.base import to_decimal
from labor_budget.models.snapshot import ProjectSnapshot
from labor_budget.validators.business_validators import BusinessRuleValidators
from labor_budget.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)


class SnapshotValidator:
    """Runs every consistency check over a project snapshot.

    Example:
        >>> validator = SnapshotValidator()
        >>> report = validator.validate(snapshot)
        >>> if not report.is_valid():
        ...     print(report.format())
    """

    def __init__(self, daily_limit: Decimal = DAILY_WORK_HOURS) -> None:
        self.daily_limit = to_decimal(daily_limit)

    def validate(
        self, snapshot: ProjectSnapshot, check_references: bool = True
    ) -> ValidationReport:
        """Validate a snapshot.

        Args:
            snapshot: Snapshot to check
            check_references: Whether to report dangling references as info

        Returns:
            ValidationReport with every issue found
        """
        report = ValidationReport()

        BusinessRuleValidators.validate_daily_ceiling(snapshot, self.daily_limit, report)
        BusinessRuleValidators.validate_justifications(snapshot, report)
        BusinessRuleValidators.validate_plan_accumulation(snapshot, report)
        BusinessRuleValidators.validate_unique_months(snapshot, report)
        BusinessRuleValidators.validate_collaborator_dates(snapshot, report)
        if check_references:
            BusinessRuleValidators.validate_references(snapshot, report)

        logger.info(f"Snapshot validation finished: {report.summary()}")
        return report
