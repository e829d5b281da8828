"""Helpers shared by CLI commands: data file, lookups and option parsing."""

import datetime as dt
from decimal import Decimal
from typing import Optional

import click

from labor_budget.cli.error_handlers import ConfigurationError, DataValidationError
from labor_budget.config.settings import get_config
from labor_budget.models.base import to_decimal
from labor_budget.models.budget import BudgetItem
from labor_budget.models.logs import month_of, validate_month
from labor_budget.models.project import ProjectRates, resolve_rates
from labor_budget.models.snapshot import ProjectSnapshot
from labor_budget.models.team import Collaborator
from labor_budget.store.entity_store import EntityStore

data_file_option = click.option(
    "--data-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Project data file (default: DATA_FILE from configuration)",
)


def open_store(data_file: Optional[str]) -> EntityStore:
    """Open the entity store on the given or configured data file."""
    config = get_config()
    path = data_file or config.data_file
    if not path:
        raise ConfigurationError(
            "No data file configured", recovery_hint="Pass --data-file or set DATA_FILE"
        )
    return EntityStore.open(path, daily_limit=config.daily_work_hours)


def project_rates(snapshot: ProjectSnapshot) -> ProjectRates:
    """Effective hourly rates, falling back to the configured defaults."""
    config = get_config()
    return resolve_rates(
        snapshot.project, config.default_rate_prof, config.default_rate_serv
    )


def current_month() -> str:
    return month_of(dt.date.today())


def month_callback(ctx, param, value: Optional[str]) -> str:
    """Click callback validating a YYYY-MM option, defaulting to this month."""
    if value is None:
        return current_month()
    try:
        return validate_month(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def decimal_callback(ctx, param, value: Optional[str]) -> Optional[Decimal]:
    """Click callback parsing a decimal number option."""
    if value is None:
        return None
    try:
        return to_decimal(value.replace(",", "."))
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a number")


def find_item(snapshot: ProjectSnapshot, ref: str) -> BudgetItem:
    """Look up a budget item by id or code."""
    item = snapshot.find_item(ref) or next(
        (b for b in snapshot.budget if b.code == ref), None
    )
    if item is None:
        raise DataValidationError(
            f"Budget item '{ref}' not found",
            recovery_hint="Use the item id or its code, e.g. 1.1",
        )
    return item


def find_collaborator(snapshot: ProjectSnapshot, ref: str) -> Collaborator:
    """Look up a collaborator by id or exact name."""
    collaborator = snapshot.find_collaborator(ref) or next(
        (c for c in snapshot.team if c.name == ref), None
    )
    if collaborator is None:
        raise DataValidationError(f"Collaborator '{ref}' not found")
    return collaborator
