"""Budget commands: import-budget, budget-template and remove-item."""

from typing import Optional

import click

from labor_budget.cli.error_handlers import DataValidationError, with_error_handling
from labor_budget.cli.utils.context import data_file_option, find_item, open_store
from labor_budget.cli.utils.formatters import format_info, format_success
from labor_budget.readers.budget_reader import BudgetReader
from labor_budget.writers.file_writer import write_budget_template


@click.command(name="import-budget")
@click.argument("spreadsheet", type=click.Path(exists=True, dir_okay=False))
@click.option("--replace", is_flag=True, help="Clear the current budget before importing")
@data_file_option
@click.pass_context
def import_budget(ctx, spreadsheet: str, replace: bool, data_file: Optional[str]):
    """Import budget items from an .xlsx or .csv spreadsheet.

    Example:
        labor-budget import-budget orcamento.xlsx
    """
    with with_error_handling(ctx.obj["debug"]):
        items = BudgetReader().read(spreadsheet)
        if not items:
            raise DataValidationError(
                "No valid budget items found",
                recovery_hint="Run 'labor-budget budget-template' for the expected columns",
            )

        store = open_store(data_file)
        if replace:
            click.echo(format_info(f"Clearing {len(store.snapshot.budget)} existing item(s)"))
            store.clear_budget()
        count = store.add_budget_items(items)
        click.echo(format_success(f"{count} item(s) imported"))


@click.command(name="budget-template")
@click.argument("output", type=click.Path(dir_okay=False), default="modelo_orcamento.xlsx")
@click.pass_context
def budget_template(ctx, output: str):
    """Write a budget spreadsheet template with one sample row.

    Example:
        labor-budget budget-template modelo.xlsx
    """
    with with_error_handling(ctx.obj["debug"]):
        path = write_budget_template(output)
        click.echo(format_success(f"Template written to {path}"))


@click.command(name="remove-item")
@click.argument("item")
@data_file_option
@click.pass_context
def remove_item(ctx, item: str, data_file: Optional[str]):
    """Remove a budget item by id or code.

    Hours, plans and measurements recorded against the item are kept.

    Example:
        labor-budget remove-item 1.2
    """
    with with_error_handling(ctx.obj["debug"]):
        store = open_store(data_file)
        budget_item = find_item(store.snapshot, item)
        store.remove_budget_item(budget_item.id)
        click.echo(format_success(f"Removed budget item {budget_item.code} ({budget_item.description})"))
