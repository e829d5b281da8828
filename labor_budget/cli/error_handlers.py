"""Enhanced error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click
from pydantic import ValidationError

from labor_budget.calculators.daily_allocation import AllocationRejectedError
from labor_budget.cli.utils.formatters import format_error, format_warning
from labor_budget.readers.budget_reader import BudgetImportError
from labor_budget.store.json_repository import StorageError
from labor_budget.writers.file_writer import ReportWriteError


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration issues."""


class DataValidationError(CLIError):
    """Error related to data validation."""


class ProcessingError(CLIError):
    """Error related to data processing."""


def _echo_with_hint(title: str, message: str, hint: Optional[str]) -> None:
    click.echo(format_error(f"{title}: {message}"))
    if hint:
        click.echo(format_warning(f"Hint: {hint}"))


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Handle CLI errors with user-friendly messages.

    Args:
        error: The exception that occurred
        debug: Whether to show full stack trace

    Returns:
        Exit code (1-7 for known error types, 130 on cancel, 255 otherwise)
    """
    if isinstance(error, ConfigurationError):
        _echo_with_hint("Configuration Error", error.message, error.recovery_hint)
        return 1

    elif isinstance(error, DataValidationError):
        _echo_with_hint("Data Validation Error", error.message, error.recovery_hint)
        return 3

    elif isinstance(error, ProcessingError):
        _echo_with_hint("Processing Error", error.message, error.recovery_hint)
        return 4

    elif isinstance(error, ValidationError):
        click.echo(format_error(f"Invalid Data: {error.error_count()} field error(s)"))
        for detail in error.errors():
            location = ".".join(str(part) for part in detail["loc"])
            click.echo(f"  {location}: {detail['msg']}")
        return 3

    elif isinstance(error, AllocationRejectedError):
        click.echo(format_error(f"Entry Rejected: {error.decision.message}"))
        if error.decision.over_budget:
            click.echo(
                format_warning(
                    f"Hint: {error.decision.remaining_budget}h left in the item budget; "
                    "pass --justification to log over budget"
                )
            )
        return 5

    elif isinstance(error, StorageError):
        _echo_with_hint(
            "Storage Error", str(error), "Check the data file path or restore a backup"
        )
        return 6

    elif isinstance(error, (BudgetImportError, ReportWriteError)):
        click.echo(format_error(f"File Error: {error}"))
        return 7

    # Handle click.Abort (user cancellation)
    elif isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"))
        return 130  # Standard exit code for SIGINT

    else:
        click.echo(format_error(f"Unexpected Error: {type(error).__name__}"))
        click.echo(str(error))

        if debug:
            click.echo("\nFull stack trace:")
            click.echo(traceback.format_exc())
        else:
            click.echo(format_warning("\nRun with --debug flag for full stack trace"))

        return 255


def with_error_handling(debug: bool = False):
    """
    Context manager adding standardized error handling to CLI commands.

    Args:
        debug: Whether to show full stack traces

    Example:
        @click.command()
        @click.pass_context
        def my_command(ctx):
            with with_error_handling(ctx.obj["debug"]):
                # Command implementation
                pass
    """

    class ErrorHandler:
        """Context manager for error handling."""

        def __init__(self, show_debug: bool):
            self.show_debug = show_debug

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            # click's own exit and usage errors pass through untouched
            if exc_val is None or isinstance(
                exc_val, (SystemExit, click.exceptions.Exit, click.ClickException)
            ):
                return False
            exit_code = handle_cli_error(exc_val, self.show_debug)
            sys.exit(exit_code)

    return ErrorHandler(debug)
