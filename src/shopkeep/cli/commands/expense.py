"""Expense commands."""

import click
from shopkeep.cli.error_handling import format_money, handle_domain_error
from shopkeep.cli.resolution import parse_datetime_or_exit
from shopkeep.domain.entities import ExpenseCategory
from shopkeep.domain.errors import DomainError, PersistenceError
from shopkeep.domain.expense import ExpenseService
from shopkeep.utils.amount_parser import parse_amount


@click.group()
def expense_group():
    """Record and list expenses."""
    pass


@expense_group.command("add")
@click.option(
    "--category",
    type=click.Choice([c.value for c in ExpenseCategory]),
    required=True,
    help="Expense category",
)
@click.option("--amount", required=True, help="Amount spent")
@click.option("--description", required=True, help="What the money was spent on")
@click.option("--date", help="Expense date (YYYY-MM-DD, 'today', 'yesterday'; defaults to now)")
@click.option("--notes", help="Notes")
@click.pass_context
def add_expense(ctx, category: str, amount: str, description: str, date: str | None, notes: str | None):
    """Record an expense.

    Examples:
        shopkeep expense add --category ice --amount 40 --description "Ice blocks"
    """
    try:
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    when = parse_datetime_or_exit(ctx, date)

    try:
        expense = ExpenseService(ctx.obj["store"]).record_expense(
            category=category, amount=value, description=description, date=when, notes=notes
        )
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Recorded expense {expense.id}: {format_money(expense.amount)} ({expense.category.value})")


@expense_group.command("list")
@click.pass_context
def list_expenses(ctx):
    """List expenses, newest first."""
    expenses = ExpenseService(ctx.obj["store"]).list_expenses()
    if not expenses:
        click.echo("No expenses found.")
        return

    for e in expenses:
        click.echo(
            f"{e.date:%Y-%m-%d %H:%M} | {e.category.value:10s} | "
            f"{format_money(e.amount):>10s} | {e.description}"
        )


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
