"""Dashboard and report commands."""

import click
from shopkeep.cli.date_filters import resolve_report_period
from shopkeep.cli.error_handling import format_money
from shopkeep.domain.reports import ReportService


@click.command("dashboard")
@click.pass_context
def dashboard(ctx):
    """Show today's sales, totals, stock alerts and best sellers."""
    stats = ReportService(ctx.obj["store"]).dashboard()

    click.echo("\nDashboard")
    click.echo("=" * 40)
    click.echo(f"Today's sales:   {format_money(stats.todays_sales):>14s}")
    click.echo(f"Total revenue:   {format_money(stats.total_revenue):>14s}")
    click.echo(f"Total expenses:  {format_money(stats.total_expenses):>14s}")
    click.echo(f"Net profit:      {format_money(stats.net_profit):>14s}")

    if stats.out_of_stock_products or stats.low_stock_products:
        click.echo("\nStock alerts:")
        for p in stats.out_of_stock_products:
            click.echo(f"  Out of stock: {p.name}")
        for p in stats.low_stock_products:
            click.echo(f"  Low stock: {p.name} ({p.stock} left)")

    if stats.top_selling_products:
        click.echo("\nTop selling products:")
        for rank, entry in enumerate(stats.top_selling_products, start=1):
            click.echo(f"  {rank}. {entry.product.name} - {entry.quantity} sold")


@click.command("report")
@click.option("--daily", is_flag=True, help="Today so far (default)")
@click.option("--weekly", is_flag=True, help="The last 7 days")
@click.option("--monthly", is_flag=True, help="The last month")
@click.option("--trend", is_flag=True, help="Also show per-day totals for the last 7 days")
@click.pass_context
def report(ctx, daily: bool, weekly: bool, monthly: bool, trend: bool):
    """Show revenue, expenses, profit and top products for a period.

    Examples:
        shopkeep report
        shopkeep report --weekly --trend
    """
    period = resolve_report_period(
        ctx, period_flags={"daily": daily, "weekly": weekly, "monthly": monthly}
    )
    service = ReportService(ctx.obj["store"])
    data = service.report(period)

    click.echo(f"\n{period.value.capitalize()} report")
    click.echo(f"{data.start_date:%Y-%m-%d %H:%M} to {data.end_date:%Y-%m-%d %H:%M}")
    click.echo("=" * 40)
    click.echo(f"Sales:           {len(data.sales):>14d}")
    click.echo(f"Revenue:         {format_money(data.total_revenue):>14s}")
    click.echo(f"Expenses:        {format_money(data.total_expenses):>14s}")
    click.echo(f"Net profit:      {format_money(data.net_profit):>14s}")

    if data.payment_breakdown:
        click.echo("\nBy payment method:")
        for method, amount in data.payment_breakdown.items():
            click.echo(f"  {method.value:12s} {format_money(amount):>14s}")

    if data.top_products:
        click.echo("\nTop products:")
        for rank, entry in enumerate(data.top_products, start=1):
            click.echo(
                f"  {rank}. {entry.product.name} - {entry.quantity} sold, {format_money(entry.revenue)}"
            )

    if trend:
        click.echo("\nLast 7 days:")
        for day in service.daily_totals():
            click.echo(
                f"  {day.day:%a %Y-%m-%d}  sales {format_money(day.sales):>12s}"
                f"  expenses {format_money(day.expenses):>12s}"
            )


def register_commands(cli):
    """Register dashboard and report commands with main CLI."""
    cli.add_command(dashboard)
    cli.add_command(report)
