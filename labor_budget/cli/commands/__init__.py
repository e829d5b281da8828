"""CLI commands."""

from labor_budget.cli.commands.budget import budget_template, import_budget, remove_item
from labor_budget.cli.commands.entries import (
    day_summary,
    delete_entry,
    log_hours,
    plan,
    record_financial,
    record_quantity,
)
from labor_budget.cli.commands.reports import costs, evolution, productivity
from labor_budget.cli.commands.team import (
    add_collaborator,
    remove_collaborator,
    setup_project,
    team,
)
from labor_budget.cli.commands.validate import validate_data

__all__ = [
    "add_collaborator",
    "budget_template",
    "costs",
    "day_summary",
    "delete_entry",
    "evolution",
    "import_budget",
    "log_hours",
    "plan",
    "productivity",
    "record_financial",
    "record_quantity",
    "remove_collaborator",
    "remove_item",
    "setup_project",
    "team",
    "validate_data",
]
