"""Inventory (stock-in / stock-out) commands."""

import click
from shopkeep.cli.error_handling import handle_domain_error
from shopkeep.cli.resolution import parse_datetime_or_exit, resolve_product_or_exit
from shopkeep.domain.entities import TransactionType
from shopkeep.domain.errors import DomainError, PersistenceError
from shopkeep.domain.inventory import InventoryService
from shopkeep.domain.product import ProductService


@click.group()
def inventory_group():
    """Record stock movements and check stock levels."""
    pass


def _record(ctx, product: str, type: TransactionType, quantity: int, date: str | None, **extra):
    store = ctx.obj["store"]
    product_service = ProductService(store)
    product_id = resolve_product_or_exit(ctx, product_service, product)
    when = parse_datetime_or_exit(ctx, date)

    try:
        InventoryService(store).record_transaction(
            product_id=product_id, type=type, quantity=quantity, date=when, **extra
        )
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)
        return

    updated = product_service.get_product(product_id)
    label = "Stock in" if type == TransactionType.IN else "Stock out"
    click.echo(f"{label}: {quantity} x {updated.name} (stock now {updated.stock})")


@inventory_group.command("in")
@click.argument("product", metavar="PRODUCT")
@click.argument("quantity", type=click.IntRange(min=1))
@click.option("--supplier", help="Supplier name")
@click.option("--date", help="Date (YYYY-MM-DD, 'today', 'yesterday'; defaults to now)")
@click.option("--notes", help="Notes")
@click.pass_context
def stock_in(ctx, product: str, quantity: int, supplier: str | None, date: str | None, notes: str | None):
    """Add stock for a product.

    Examples:
        shopkeep inventory in "Tilapia" 30 --supplier "Tema Harbour"
    """
    _record(ctx, product, TransactionType.IN, quantity, date, supplier=supplier, notes=notes)


@inventory_group.command("out")
@click.argument("product", metavar="PRODUCT")
@click.argument("quantity", type=click.IntRange(min=1))
@click.option("--reason", help="Why stock is removed (spoiled, damaged, ...)")
@click.option("--date", help="Date (YYYY-MM-DD, 'today', 'yesterday'; defaults to now)")
@click.option("--notes", help="Notes")
@click.pass_context
def stock_out(ctx, product: str, quantity: int, reason: str | None, date: str | None, notes: str | None):
    """Remove stock for a product.

    Fails if the product does not have enough stock.

    Examples:
        shopkeep inventory out "Tilapia" 2 --reason spoiled
    """
    _record(ctx, product, TransactionType.OUT, quantity, date, reason=reason, notes=notes)


@inventory_group.command("list")
@click.option("--product", help="Only show movements for this product (name or ID)")
@click.pass_context
def list_transactions(ctx, product: str | None):
    """List stock movements, newest first."""
    store = ctx.obj["store"]
    product_service = ProductService(store)
    product_id = None
    if product is not None:
        product_id = resolve_product_or_exit(ctx, product_service, product)

    transactions = InventoryService(store).list_transactions(product_id=product_id)
    if not transactions:
        click.echo("No inventory transactions found.")
        return

    for t in transactions:
        found = product_service.get_product(t.product_id)
        name = found.name if found is not None else "(deleted product)"
        detail = t.supplier if t.type == TransactionType.IN else t.reason
        line = f"{t.date:%Y-%m-%d %H:%M} | {t.type.value:3s} | {t.quantity:5d} | {name}"
        if detail:
            line += f" | {detail}"
        click.echo(line)


@inventory_group.command("alerts")
@click.pass_context
def stock_alerts(ctx):
    """Show low-stock and out-of-stock products."""
    low, out = InventoryService(ctx.obj["store"]).stock_alerts()
    if not low and not out:
        click.echo("All products are well stocked.")
        return

    for p in out:
        click.echo(f"Out of stock: {p.name}")
    for p in low:
        click.echo(f"Low stock: {p.name} ({p.stock} left)")


def register_commands(cli):
    """Register inventory commands with main CLI."""
    cli.add_command(inventory_group, name="inventory")
