"""Validation layer for snapshot consistency and business rule compliance."""

from labor_budget.validators.business_validators import BusinessRuleValidators
from labor_budget.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)
from labor_budget.validators.validator import SnapshotValidator

__all__ = [
    "SnapshotValidator",
    "ValidationReport",
    "ValidationIssue",
    "ValidationSeverity",
    "BusinessRuleValidators",
]
