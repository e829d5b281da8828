"""Validation report for collecting and formatting data consistency issues."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional


class ValidationSeverity(IntEnum):
    """Severity levels for validation issues."""

    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass
class ValidationIssue:
    """A single consistency finding.

    Attributes:
        severity: The severity level of the issue
        field: The collection or field the issue is about (e.g. "logs.hours")
        message: Human-readable description of the issue
        value: The value that caused the issue
        context: Optional identifiers (collaborator, item, month, date)
    """

    severity: ValidationSeverity
    field: str
    message: str
    value: Any
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        context_str = ""
        if self.context:
            context_str = " (" + ", ".join(f"{k}={v}" for k, v in self.context.items()) + ")"
        return f"[{self.severity.name}] {self.field}: {self.message}{context_str}"


class ValidationReport:
    """Collects validation issues found in a project snapshot.

    Only ERROR issues make a report invalid; warnings and info messages are
    reported but tolerated.

    Example:
        >>> report = ValidationReport()
        >>> report.add_warning("plans", "Item planned above 100%", 120)
        >>> report.is_valid()
        True
    """

    def __init__(self) -> None:
        self.issues: List[ValidationIssue] = []

    def _count(self, severity: ValidationSeverity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    def _of(self, severity: ValidationSeverity) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == severity]

    @property
    def error_count(self) -> int:
        return self._count(ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return self._count(ValidationSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return self._count(ValidationSeverity.INFO)

    def is_valid(self) -> bool:
        """True when the report holds no errors."""
        return self.error_count == 0

    def has_errors(self) -> bool:
        return self.error_count > 0

    def add(
        self,
        severity: ValidationSeverity,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Append an issue with the given severity.

        Args:
            severity: Issue severity
            field: Collection or field name
            message: Human-readable description
            value: Offending value
            context: Optional identifiers for locating the record
        """
        self.issues.append(
            ValidationIssue(
                severity=severity,
                field=field,
                message=message,
                value=value,
                context=context,
            )
        )

    def add_error(self, field: str, message: str, value: Any, context: Optional[Dict[str, Any]] = None) -> None:
        self.add(ValidationSeverity.ERROR, field, message, value, context)

    def add_warning(self, field: str, message: str, value: Any, context: Optional[Dict[str, Any]] = None) -> None:
        self.add(ValidationSeverity.WARNING, field, message, value, context)

    def add_info(self, field: str, message: str, value: Any, context: Optional[Dict[str, Any]] = None) -> None:
        self.add(ValidationSeverity.INFO, field, message, value, context)

    def get_errors(self) -> List[ValidationIssue]:
        return self._of(ValidationSeverity.ERROR)

    def get_warnings(self) -> List[ValidationIssue]:
        return self._of(ValidationSeverity.WARNING)

    def get_info(self) -> List[ValidationIssue]:
        return self._of(ValidationSeverity.INFO)

    def merge(self, other: "ValidationReport") -> None:
        """Merge another validation report into this one."""
        self.issues.extend(other.issues)

    def summary(self) -> str:
        """Counts of errors, warnings and info messages.

        Returns:
            e.g. "2 error(s), 1 warning(s)" or "No issues found"
        """
        parts = []
        if self.error_count:
            parts.append(f"{self.error_count} error(s)")
        if self.warning_count:
            parts.append(f"{self.warning_count} warning(s)")
        if self.info_count:
            parts.append(f"{self.info_count} info message(s)")
        return ", ".join(parts) if parts else "No issues found"

    def format(self) -> str:
        """Format the report for display, grouped by severity."""
        if not self.issues:
            return "Validation successful - no issues found"

        lines = [f"Validation Report - {self.summary()}", "=" * 60]
        sections = (
            ("ERRORS", self.get_errors()),
            ("WARNINGS", self.get_warnings()),
            ("INFO", self.get_info()),
        )
        for title, issues in sections:
            if issues:
                lines.append(f"\n{title}:")
                lines.extend(f"  - {issue}" for issue in issues)
        return "\n".join(lines)
