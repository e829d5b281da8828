"""Report commands: productivity, costs and evolution."""

from typing import Optional

import click

from labor_budget.aggregators.evolution_series import EvolutionSeriesBuilder
from labor_budget.calculators.cost_reconciler import CostReconciler
from labor_budget.calculators.productivity import ProductivityAnalyzer
from labor_budget.cli.error_handlers import with_error_handling
from labor_budget.cli.utils.context import (
    data_file_option,
    month_callback,
    open_store,
    project_rates,
)
from labor_budget.cli.utils.formatters import (
    format_currency,
    format_hours,
    format_info,
    format_success,
    format_table,
    format_warning,
)
from labor_budget.config.settings import get_config
from labor_budget.utils.logging_utils import LogContext
from labor_budget.writers.file_writer import write_frames
from labor_budget.writers.report_generator import ReportGenerator

output_option = click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write the report to a .csv or .xlsx file",
)


@click.command(name="productivity")
@click.option("--month", callback=month_callback, help="Month (YYYY-MM, default: current)")
@click.option("--all-items", is_flag=True, help="List every item instead of the ranking")
@data_file_option
@output_option
@click.pass_context
def productivity(
    ctx, month: str, all_items: bool, data_file: Optional[str], output: Optional[str]
):
    """Rank budget items by executed quantity and compare productivity.

    Realized productivity is hours used per executed unit; an item is
    "Eficiente" when it is not above the predicted hours per unit.

    Example:
        labor-budget productivity --month 2024-01
    """
    with with_error_handling(ctx.obj["debug"]), LogContext(month=month, report="productivity"):
        snapshot = open_store(data_file).snapshot
        report = ProductivityAnalyzer(snapshot, get_config().ranking_size).analyze(month)

        click.echo(format_info(f"Productivity for {month}"))
        click.echo(f"Predicted hours: {format_hours(report.total_predicted_hours)}")
        click.echo(f"Logged hours:    {format_hours(report.total_logged_hours)}")
        click.echo()

        rows = report.items if all_items else report.ranked
        if not rows:
            click.echo(format_warning("No executed quantity recorded for this month"))
        else:
            click.echo(
                format_table(
                    ["Code", "Description", "Executed", "Hours", "Real h/un", "Pred h/un", "Status"],
                    [
                        [
                            p.item.code,
                            p.item.description,
                            f"{p.executed_quantity} {p.item.unit}",
                            format_hours(p.hours_used),
                            f"{p.realized_productivity:.2f}",
                            f"{p.predicted_productivity:.2f}",
                            p.status_label,
                        ]
                        for p in rows
                    ],
                )
            )

        if output:
            frame = ReportGenerator().productivity_frame(report, ranked_only=not all_items)
            path = write_frames({f"Produtividade {month}": frame}, output)
            click.echo(format_success(f"Report written to {path}"))


@click.command(name="costs")
@click.option("--month", callback=month_callback, help="Month (YYYY-MM, default: current)")
@data_file_option
@output_option
@click.pass_context
def costs(ctx, month: str, data_file: Optional[str], output: Optional[str]):
    """Compare predicted, measured and payroll labor cost for a month.

    Example:
        labor-budget costs --month 2024-01 --output custos.xlsx
    """
    with with_error_handling(ctx.obj["debug"]), LogContext(month=month, report="costs"):
        snapshot = open_store(data_file).snapshot
        report = CostReconciler(snapshot, project_rates(snapshot)).reconcile(month)

        click.echo(format_info(f"Labor cost for {month}"))
        click.echo(f"Predicted cost:  {format_currency(report.total_predicted_cost)}")
        click.echo(f"Measured cost:   {format_currency(report.total_measured_cost)}")
        click.echo(f"Payroll cost:    {format_currency(report.actual_cost)}")
        click.echo()

        if not report.active_items:
            click.echo(format_warning("No planned or logged hours for this month"))
        else:
            click.echo(
                format_table(
                    ["Code", "Description", "Predicted", "Measured", "Deviation"],
                    [
                        [
                            c.item.code,
                            c.item.description,
                            format_currency(c.predicted_cost),
                            format_currency(c.measured_cost),
                            format_currency(c.deviation),
                        ]
                        for c in report.active_items
                    ],
                )
            )

        if output:
            generator = ReportGenerator()
            path = write_frames(
                {
                    "Custos": generator.cost_frame(report),
                    "Resumo": generator.cost_summary_frame(report),
                },
                output,
            )
            click.echo(format_success(f"Report written to {path}"))


@click.command(name="evolution")
@data_file_option
@output_option
@click.pass_context
def evolution(ctx, data_file: Optional[str], output: Optional[str]):
    """Show the month-by-month evolution of hours and cost.

    Example:
        labor-budget evolution --output evolucao.csv
    """
    with with_error_handling(ctx.obj["debug"]), LogContext(report="evolution"):
        snapshot = open_store(data_file).snapshot
        points = EvolutionSeriesBuilder(snapshot, project_rates(snapshot)).build()

        if not points:
            click.echo(format_warning("No months with plans, logs or financial records"))
            return

        click.echo(
            format_table(
                ["Month", "Pred. cost acc", "Meas. cost acc", "Payroll acc", "Pred. h acc", "Meas. h acc"],
                [
                    [
                        p.month,
                        format_currency(p.acc_predicted_cost),
                        format_currency(p.acc_measured_cost),
                        format_currency(p.acc_payroll_cost),
                        format_hours(p.acc_predicted_hours),
                        format_hours(p.acc_measured_hours),
                    ]
                    for p in points
                ],
            )
        )

        if output:
            frame = ReportGenerator().evolution_frame(points)
            path = write_frames({"Evolucao": frame}, output)
            click.echo(format_success(f"Report written to {path}"))
