"""Validate data command."""

from typing import Optional

import click

from labor_budget.cli.error_handlers import DataValidationError, with_error_handling
from labor_budget.cli.utils.context import data_file_option, open_store
from labor_budget.cli.utils.formatters import (
    format_error,
    format_info,
    format_success,
    format_warning,
)
from labor_budget.config.settings import get_config
from labor_budget.validators.validation_report import ValidationSeverity
from labor_budget.validators.validator import SnapshotValidator

MAX_ISSUES_PER_SEVERITY = 20

_STYLES = {
    ValidationSeverity.ERROR: format_error,
    ValidationSeverity.WARNING: format_warning,
    ValidationSeverity.INFO: format_info,
}


@click.command(name="validate-data")
@click.option(
    "--severity",
    type=click.Choice(["error", "warning", "info"], case_sensitive=False),
    default="warning",
    help="Minimum severity level to display (default: warning)",
)
@data_file_option
@click.pass_context
def validate_data(ctx, severity: str, data_file: Optional[str]):
    """Check the data file for inconsistent records.

    Checks for:
    - Days above the daily hour limit
    - Over-budget entries without justification
    - Items planned above 100%
    - Duplicated monthly records
    - Entries outside a collaborator's dates
    - References to removed collaborators or items

    Returns non-zero exit code if errors are found.

    Example:
        labor-budget validate-data --severity info
    """
    with with_error_handling(ctx.obj["debug"]):
        click.echo(format_info("Validating project data..."))
        severity_level = ValidationSeverity[severity.upper()]

        snapshot = open_store(data_file).snapshot
        report = SnapshotValidator(get_config().daily_work_hours).validate(snapshot)

        click.echo()
        click.echo("=" * 60)
        click.echo("Validation Summary")
        click.echo("=" * 60)
        click.echo(f"Errors:           {report.error_count}")
        click.echo(f"Warnings:         {report.warning_count}")
        click.echo(f"Info:             {report.info_count}")

        for sev in (ValidationSeverity.ERROR, ValidationSeverity.WARNING, ValidationSeverity.INFO):
            if sev < severity_level:
                continue
            issues = [i for i in report.issues if i.severity == sev]
            if not issues:
                continue
            click.echo()
            click.echo(f"{sev.name}S ({len(issues)}):")
            for issue in issues[:MAX_ISSUES_PER_SEVERITY]:
                click.echo(_STYLES[sev](f"  {issue}"))
            if len(issues) > MAX_ISSUES_PER_SEVERITY:
                click.echo(f"  ... and {len(issues) - MAX_ISSUES_PER_SEVERITY} more")

        click.echo()
        if report.has_errors():
            raise DataValidationError(
                f"Validation failed with {report.error_count} error(s)",
                recovery_hint="Fix or remove the listed records",
            )
        if report.warning_count:
            click.echo(format_warning(f"Validation completed with {report.warning_count} warning(s)"))
        else:
            click.echo(format_success("Validation passed! No issues found."))
