"""Sale commands."""

import click
from shopkeep.cli.error_handling import format_money, handle_domain_error
from shopkeep.cli.resolution import (
    parse_datetime_or_exit,
    resolve_customer_or_exit,
    resolve_product_or_exit,
)
from shopkeep.domain.customer import CustomerService
from shopkeep.domain.entities import PaymentMethod, SaleLine
from shopkeep.domain.errors import DomainError, PersistenceError
from shopkeep.domain.product import ProductService
from shopkeep.domain.sale import SaleService
from shopkeep.utils.amount_parser import parse_quantity


@click.group()
def sale_group():
    """Record and list sales."""
    pass


def _parse_item(ctx, product_service: ProductService, value: str) -> SaleLine:
    """Turn "PRODUCT:QTY" (or just "PRODUCT" for one unit) into a SaleLine."""
    product, sep, quantity = value.rpartition(":")
    if not sep:
        product, quantity = value, "1"
    try:
        qty = parse_quantity(quantity)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    return SaleLine(product_id=resolve_product_or_exit(ctx, product_service, product), quantity=qty)


@sale_group.command("record")
@click.option(
    "--item",
    "items",
    multiple=True,
    required=True,
    help="Product and quantity as PRODUCT:QTY (repeatable)",
)
@click.option(
    "--payment",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.CASH.value,
    show_default=True,
    help="Payment method",
)
@click.option("--customer", help="Customer name or ID")
@click.option("--date", help="Sale date (YYYY-MM-DD, 'today', 'yesterday'; defaults to now)")
@click.option("--notes", help="Notes")
@click.pass_context
def record_sale(
    ctx,
    items: tuple[str, ...],
    payment: str,
    customer: str | None,
    date: str | None,
    notes: str | None,
):
    """Record a sale and take the sold quantities out of stock.

    Examples:
        shopkeep sale record --item "Tilapia:3" --item "Sobolo:2"
        shopkeep sale record --item Tilapia:1 --payment mobileMoney --customer "Ama Mensah"
    """
    store = ctx.obj["store"]
    product_service = ProductService(store)
    lines = [_parse_item(ctx, product_service, value) for value in items]

    customer_id = None
    if customer is not None:
        customer_id = resolve_customer_or_exit(ctx, CustomerService(store), customer)

    when = parse_datetime_or_exit(ctx, date)

    try:
        sale = SaleService(store).record_sale(
            items=lines,
            payment_method=payment,
            date=when,
            customer_id=customer_id,
            notes=notes,
        )
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Recorded sale {sale.id}")
    for item in sale.items:
        click.echo(
            f"  {item.quantity} x {item.product_name} @ {format_money(item.price)} = {format_money(item.total)}"
        )
    click.echo(f"  Total: {format_money(sale.total)} ({sale.payment_method.value})")


@sale_group.command("list")
@click.option("--today", "today_only", is_flag=True, help="Only today's sales")
@click.option("--customer", help="Only sales for this customer (name or ID)")
@click.pass_context
def list_sales(ctx, today_only: bool, customer: str | None):
    """List sales, newest first."""
    store = ctx.obj["store"]
    service = SaleService(store)

    if today_only:
        sales = sorted(service.todays_sales(), key=lambda s: s.date, reverse=True)
    else:
        customer_id = None
        if customer is not None:
            customer_id = resolve_customer_or_exit(ctx, CustomerService(store), customer)
        sales = service.list_sales(customer_id=customer_id)

    if not sales:
        click.echo("No sales found.")
        return

    for s in sales:
        names = ", ".join(f"{i.quantity} x {i.product_name}" for i in s.items)
        click.echo(
            f"{s.date:%Y-%m-%d %H:%M} | {format_money(s.total):>10s} | "
            f"{s.payment_method.value:11s} | {names}"
        )
    if today_only:
        click.echo(f"Total today: {format_money(sum(s.total for s in sales))}")


def register_commands(cli):
    """Register sale commands with main CLI."""
    cli.add_command(sale_group, name="sale")
