"""Project and team commands: setup-project, add-collaborator, remove-collaborator and team."""

import datetime as dt
import uuid
from decimal import Decimal
from typing import Optional

import click

from labor_budget.cli.error_handlers import with_error_handling
from labor_budget.cli.utils.context import (
    data_file_option,
    decimal_callback,
    find_collaborator,
    open_store,
    project_rates,
)
from labor_budget.cli.utils.formatters import (
    format_currency,
    format_info,
    format_success,
    format_table,
    format_warning,
)
from labor_budget.models.project import ROLES, SERVENTE, Project
from labor_budget.models.team import Collaborator

date_type = click.DateTime(formats=["%Y-%m-%d"])


@click.command(name="setup-project")
@click.option("--name", "-n", required=True, help="Project (site) name")
@click.option("--rate-prof", callback=decimal_callback, help="Hourly rate of a PROFISSIONAL")
@click.option("--rate-serv", callback=decimal_callback, help="Hourly rate of a SERVENTE")
@data_file_option
@click.pass_context
def setup_project(
    ctx,
    name: str,
    rate_prof: Optional[Decimal],
    rate_serv: Optional[Decimal],
    data_file: Optional[str],
):
    """Create the project or update its name and hourly rates.

    Updating an existing project keeps its creation date and any rate left
    out. Missing or zero rates fall back to the configured defaults.

    Example:
        labor-budget setup-project -n "Residencial Jardim" --rate-prof 55 --rate-serv 38
    """
    with with_error_handling(ctx.obj["debug"]):
        store = open_store(data_file)
        current = store.snapshot.project
        fields = {
            "name": name,
            "hourly_rate_prof": rate_prof,
            "hourly_rate_serv": rate_serv,
        }
        if current is not None:
            fields["created_at"] = current.created_at
            if rate_prof is None:
                fields["hourly_rate_prof"] = current.hourly_rate_prof
            if rate_serv is None:
                fields["hourly_rate_serv"] = current.hourly_rate_serv

        store.set_project(Project(**fields))

        rates = project_rates(store.snapshot)
        click.echo(format_success(f"Project '{store.snapshot.project.name}' saved"))
        click.echo(
            f"Rates: PROFISSIONAL {format_currency(rates.prof)}/h, "
            f"SERVENTE {format_currency(rates.serv)}/h"
        )


@click.command(name="add-collaborator")
@click.option("--name", "-n", required=True, help="Collaborator name")
@click.option(
    "--role",
    "-r",
    type=click.Choice(ROLES, case_sensitive=False),
    default=SERVENTE,
    show_default=True,
    help="Worker role",
)
@click.option("--start-date", type=date_type, default=None, help="First day on site (default: today)")
@click.option("--end-date", type=date_type, default=None, help="Last day on site")
@data_file_option
@click.pass_context
def add_collaborator(
    ctx,
    name: str,
    role: str,
    start_date: Optional[dt.datetime],
    end_date: Optional[dt.datetime],
    data_file: Optional[str],
):
    """Add a collaborator to the team.

    Example:
        labor-budget add-collaborator -n "Maria Souza" -r SERVENTE --start-date 2024-01-08
    """
    with with_error_handling(ctx.obj["debug"]):
        store = open_store(data_file)
        collaborator = Collaborator(
            id=str(uuid.uuid4()),
            name=name,
            role=role.upper(),
            start_date=start_date.date() if start_date else dt.date.today(),
            end_date=end_date.date() if end_date else None,
        )
        store.add_collaborator(collaborator)

        click.echo(
            format_success(
                f"Added {collaborator.name} ({collaborator.role}) "
                f"starting {collaborator.start_date}"
            )
        )
        click.echo(f"Id: {collaborator.id}")


@click.command(name="remove-collaborator")
@click.argument("collaborator")
@data_file_option
@click.pass_context
def remove_collaborator(ctx, collaborator: str, data_file: Optional[str]):
    """Remove a collaborator (by id or name) from the team.

    Hours already logged by the collaborator are kept.

    Example:
        labor-budget remove-collaborator "Maria Souza"
    """
    with with_error_handling(ctx.obj["debug"]):
        store = open_store(data_file)
        worker = find_collaborator(store.snapshot, collaborator)
        kept = sum(1 for log in store.snapshot.logs if log.collaborator_id == worker.id)

        store.remove_collaborator(worker.id)

        click.echo(format_success(f"Removed {worker.name}"))
        if kept:
            noun = "entry" if kept == 1 else "entries"
            click.echo(format_info(f"Kept {kept} logged {noun} by {worker.name}"))


@click.command(name="team")
@data_file_option
@click.pass_context
def team(ctx, data_file: Optional[str]):
    """List the team.

    Example:
        labor-budget team
    """
    with with_error_handling(ctx.obj["debug"]):
        snapshot = open_store(data_file).snapshot
        if not snapshot.team:
            click.echo(format_warning("No collaborators yet; use add-collaborator"))
            return

        click.echo(
            format_table(
                ["Id", "Name", "Role", "Start", "End"],
                [
                    [
                        c.id,
                        c.name,
                        c.role,
                        str(c.start_date),
                        str(c.end_date) if c.end_date else "-",
                    ]
                    for c in snapshot.team
                ],
            )
        )
