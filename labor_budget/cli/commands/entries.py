"""Data entry commands: daily hours, monthly plans, executed quantities and HR payroll."""

import datetime as dt
from decimal import Decimal
from typing import Optional

import click

from labor_budget.calculators.monthly_projection import executed_percentage
from labor_budget.calculators.number_utils import HUNDRED
from labor_budget.cli.error_handlers import DataValidationError, with_error_handling
from labor_budget.cli.utils.context import (
    data_file_option,
    decimal_callback,
    find_collaborator,
    find_item,
    month_callback,
    open_store,
)
from labor_budget.cli.utils.formatters import (
    format_currency,
    format_hours,
    format_info,
    format_percentage,
    format_success,
    format_table,
    format_warning,
)


@click.command(name="log-hours")
@click.option("--collaborator", "-c", required=True, help="Collaborator id or name")
@click.option("--item", "-i", required=True, help="Budget item id or code")
@click.option("--hours", "-h", required=True, callback=decimal_callback, help="Hours worked")
@click.option(
    "--date",
    "work_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Day of work (YYYY-MM-DD, default: today)",
)
@click.option("--justification", "-j", default=None, help="Reason for exceeding the item budget")
@data_file_option
@click.pass_context
def log_hours(
    ctx,
    collaborator: str,
    item: str,
    hours: Decimal,
    work_date: Optional[dt.datetime],
    justification: Optional[str],
    data_file: Optional[str],
):
    """Log hours worked by a collaborator on a budget item.

    The entry is refused when it would take the collaborator past the daily
    hour limit, or when it exceeds the item's budgeted hours for the
    collaborator's role without a justification.

    Example:
        labor-budget log-hours -c "José Almeida" -i 1.1 -h 6 --date 2024-01-10
    """
    with with_error_handling(ctx.obj["debug"]):
        store = open_store(data_file)
        date = work_date.date() if work_date else dt.date.today()
        worker = find_collaborator(store.snapshot, collaborator)
        budget_item = find_item(store.snapshot, item)

        entry = store.add_daily_entry(
            worker.id, budget_item.id, hours, date, justification
        )

        remaining = store.tracker().remaining_capacity(worker.id, date)
        click.echo(
            format_success(
                f"Logged {format_hours(entry.hours)} for {worker.name} on "
                f"{budget_item.code} ({date})"
            )
        )
        click.echo(f"Remaining today: {format_hours(remaining)}")
        if entry.justification:
            click.echo(format_warning(f"Over budget: {entry.justification}"))


@click.command(name="plan")
@click.option("--item", "-i", required=True, help="Budget item id or code")
@click.option("--month", callback=month_callback, help="Month (YYYY-MM, default: current)")
@click.option(
    "--percentage", "-p", required=True, callback=decimal_callback, help="Planned percentage (0-100)"
)
@data_file_option
@click.pass_context
def plan(ctx, item: str, month: str, percentage: Decimal, data_file: Optional[str]):
    """Set the planned percentage of a budget item for a month.

    Percentages outside 0-100 are clamped. Replaces any existing plan for the
    same item and month.

    Example:
        labor-budget plan -i 1.1 --month 2024-01 -p 50
    """
    with with_error_handling(ctx.obj["debug"]):
        store = open_store(data_file)
        budget_item = find_item(store.snapshot, item)

        total = store.set_plan_percentage(budget_item.id, month, percentage)
        planned = store.snapshot.find_plan(budget_item.id, month)

        click.echo(
            format_success(
                f"Planned {format_percentage(planned.projected_percentage)} of "
                f"{budget_item.code} for {month}"
            )
        )
        click.echo(f"Accumulated: {format_percentage(total)}")
        if total > HUNDRED:
            click.echo(format_warning(f"{budget_item.code} is planned above 100%"))


@click.command(name="delete-entry")
@click.argument("entry_id")
@data_file_option
@click.pass_context
def delete_entry(ctx, entry_id: str, data_file: Optional[str]):
    """Delete a daily entry by its id (see day-summary for the ids).

    Example:
        labor-budget delete-entry 3f2b9c4e-...
    """
    with with_error_handling(ctx.obj["debug"]):
        store = open_store(data_file)
        entry = next((log for log in store.snapshot.logs if log.id == entry_id), None)
        if entry is None:
            raise DataValidationError(
                f"Daily entry '{entry_id}' not found",
                recovery_hint="Run 'labor-budget day-summary --date YYYY-MM-DD' to list entry ids",
            )

        worker = store.snapshot.find_collaborator(entry.collaborator_id)
        budget_item = store.snapshot.find_item(entry.budget_item_id)
        store.remove_daily_entry(entry.id)

        click.echo(
            format_success(
                f"Deleted {format_hours(entry.hours)} by "
                f"{worker.name if worker else entry.collaborator_id} on "
                f"{budget_item.code if budget_item else entry.budget_item_id} ({entry.date})"
            )
        )


@click.command(name="day-summary")
@click.option(
    "--date",
    "work_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Day of work (YYYY-MM-DD, default: today)",
)
@data_file_option
@click.pass_context
def day_summary(ctx, work_date: Optional[dt.datetime], data_file: Optional[str]):
    """Show each collaborator's hours for a day and the day's entries.

    Example:
        labor-budget day-summary --date 2024-01-10
    """
    with with_error_handling(ctx.obj["debug"]):
        store = open_store(data_file)
        date = work_date.date() if work_date else dt.date.today()
        snapshot = store.snapshot

        click.echo(format_info(f"Team on {date} (limit {format_hours(store.daily_limit)} per day)"))
        summary = store.tracker().collaborator_day_summary(date)
        if not summary:
            click.echo(format_warning("No collaborators yet; use add-collaborator"))
        else:
            click.echo(
                format_table(
                    ["Collaborator", "Logged", "Remaining", "Status"],
                    [
                        [
                            day.name,
                            format_hours(day.logged_hours),
                            format_hours(day.remaining_hours),
                            "Complete" if day.is_complete else "Open",
                        ]
                        for day in summary
                    ],
                )
            )

        entries = [log for log in snapshot.logs if log.date == date]
        click.echo()
        if not entries:
            click.echo(format_info("No entries logged on this day"))
            return

        rows = []
        for log in entries:
            worker = snapshot.find_collaborator(log.collaborator_id)
            budget_item = snapshot.find_item(log.budget_item_id)
            rows.append(
                [
                    log.id,
                    worker.name if worker else log.collaborator_id,
                    budget_item.code if budget_item else log.budget_item_id,
                    format_hours(log.hours),
                    log.justification or "",
                ]
            )
        click.echo(format_table(["Id", "Collaborator", "Item", "Hours", "Justification"], rows))


@click.command(name="record-quantity")
@click.option("--item", "-i", required=True, help="Budget item id or code")
@click.option("--month", callback=month_callback, help="Month (YYYY-MM, default: current)")
@click.option(
    "--quantity", "-q", required=True, callback=decimal_callback, help="Quantity executed in the month"
)
@data_file_option
@click.pass_context
def record_quantity(ctx, item: str, month: str, quantity: Decimal, data_file: Optional[str]):
    """Record the quantity of a budget item executed in a month.

    Negative quantities are recorded as 0. Replaces any existing measurement
    for the same item and month.

    Example:
        labor-budget record-quantity -i 1.1 --month 2024-01 -q 40
    """
    with with_error_handling(ctx.obj["debug"]):
        store = open_store(data_file)
        budget_item = find_item(store.snapshot, item)

        record = store.set_executed_quantity(budget_item.id, month, quantity)
        share = executed_percentage(store.snapshot, budget_item.id, month)

        click.echo(
            format_success(
                f"Recorded {record.executed_quantity} {budget_item.unit} of "
                f"{budget_item.code} for {month}"
            )
        )
        click.echo(
            f"Executed this month: {format_percentage(share)} of "
            f"{budget_item.quantity} {budget_item.unit}"
        )


@click.command(name="record-financial")
@click.option("--month", callback=month_callback, help="Month (YYYY-MM, default: current)")
@click.option("--hr-hours", default="0", callback=decimal_callback, help="Hours reported by HR")
@click.option("--payroll", default="0", callback=decimal_callback, help="Payroll cost reported by HR")
@click.option("--indirect", default="0", callback=decimal_callback, help="Indirect labor cost")
@data_file_option
@click.pass_context
def record_financial(
    ctx,
    month: str,
    hr_hours: Decimal,
    payroll: Decimal,
    indirect: Decimal,
    data_file: Optional[str],
):
    """Record the HR payroll figures of a month.

    Replaces the month's previous figures.

    Example:
        labor-budget record-financial --month 2024-01 --hr-hours 30 --payroll 1100 --indirect 200
    """
    with with_error_handling(ctx.obj["debug"]):
        store = open_store(data_file)
        record = store.save_financial_record(month, hr_hours, payroll, indirect)

        click.echo(format_success(f"Saved HR data for {month}"))
        click.echo(
            f"HR hours: {format_hours(record.hr_hours)} | "
            f"Payroll: {format_currency(record.payroll_cost)} | "
            f"Indirect: {format_currency(record.indirect_cost)}"
        )
