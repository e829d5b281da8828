"""Labor Budget CLI.

This module provides a command-line interface for the labor budget tracker.
It includes commands for setting up the project and team, logging hours,
planning, recording measurements and payroll, importing the budget and
producing the productivity, cost and evolution reports.
"""

import click
from pydantic import ValidationError

from labor_budget import __version__
from labor_budget.cli.commands import (
    add_collaborator,
    budget_template,
    costs,
    day_summary,
    delete_entry,
    evolution,
    import_budget,
    log_hours,
    plan,
    productivity,
    record_financial,
    record_quantity,
    remove_collaborator,
    remove_item,
    setup_project,
    team,
    validate_data,
)
from labor_budget.cli.error_handlers import ConfigurationError, with_error_handling
from labor_budget.config.logging_config import LoggingConfig, configure_logging
from labor_budget.config.settings import get_config


@click.group(
    help="Labor Budget CLI - Track construction labor hours against the budget"
)
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Show full stack traces and DEBUG logs")
@click.pass_context
def cli(ctx, debug: bool):
    """Labor Budget CLI main entry point."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    with with_error_handling(debug):
        try:
            settings = get_config()
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid settings: {e.error_count()} field error(s)",
                recovery_hint="Check the environment variables and the .env file",
            ) from e
        configure_logging(LoggingConfig.from_settings(settings, debug=debug))


# Register commands
cli.add_command(setup_project)
cli.add_command(add_collaborator)
cli.add_command(remove_collaborator)
cli.add_command(team)
cli.add_command(import_budget)
cli.add_command(budget_template)
cli.add_command(remove_item)
cli.add_command(log_hours)
cli.add_command(delete_entry)
cli.add_command(day_summary)
cli.add_command(plan)
cli.add_command(record_quantity)
cli.add_command(record_financial)
cli.add_command(productivity)
cli.add_command(costs)
cli.add_command(evolution)
cli.add_command(validate_data)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
