"""Product management commands."""

import click
from shopkeep.cli.error_handling import format_money, handle_domain_error
from shopkeep.cli.resolution import resolve_product_or_exit
from shopkeep.domain.entities import ProductCategory
from shopkeep.domain.errors import DomainError, PersistenceError
from shopkeep.domain.product import ProductService
from shopkeep.utils.amount_parser import parse_amount

CATEGORY_CHOICE = click.Choice([c.value for c in ProductCategory])


def _parse_price_or_exit(ctx, price: str):
    try:
        return parse_amount(price)
    except ValueError as e:
        click.echo(f"Error: Please enter a valid price: {e}", err=True)
        ctx.exit(1)


@click.group()
def product_group():
    """Manage the product catalog."""
    pass


@product_group.command("add")
@click.argument("name", metavar="PRODUCT_NAME")
@click.option("--category", type=CATEGORY_CHOICE, required=True, help="Product category")
@click.option("--price", required=True, help="Unit price (e.g., 12.50)")
@click.option("--stock", type=click.IntRange(min=0), default=0, show_default=True, help="Initial stock")
@click.option("--description", help="Product description")
@click.option("--image", help="Image path or URI")
@click.pass_context
def add_product(
    ctx,
    name: str,
    category: str,
    price: str,
    stock: int,
    description: str | None,
    image: str | None,
):
    """Add a product to the catalog.

    Examples:
        shopkeep product add "Tilapia" --category freshFish --price 12.50 --stock 20
        shopkeep product add "Sobolo" --category drinks --price 5 --stock 48
    """
    service = ProductService(ctx.obj["store"])
    unit_price = _parse_price_or_exit(ctx, price)

    try:
        created = service.create_product(
            name=name,
            category=category,
            price=unit_price,
            stock=stock,
            description=description,
            image=image,
        )
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created product '{created.name}' (ID: {created.id})")


@product_group.command("list")
@click.option("--search", help="Filter by name")
@click.option("--category", type=CATEGORY_CHOICE, help="Filter by category")
@click.pass_context
def list_products(ctx, search: str | None, category: str | None):
    """List products with their price and stock."""
    service = ProductService(ctx.obj["store"])
    products = service.list_products(search=search, category=category)
    if not products:
        click.echo("No products found.")
        return

    click.echo("\nProducts:")
    click.echo("-" * 80)
    for p in products:
        click.echo(
            f"{p.id} | {p.name:20s} | {p.category.value:14s} | "
            f"{format_money(p.price):>10s} | Stock: {p.stock}"
        )


@product_group.command("update")
@click.argument("product", metavar="PRODUCT")
@click.option("--name", help="New name")
@click.option("--category", type=CATEGORY_CHOICE, help="New category")
@click.option("--price", help="New unit price")
@click.option("--stock", type=click.IntRange(min=0), help="Corrected stock count")
@click.option("--description", help="New description")
@click.pass_context
def update_product(
    ctx,
    product: str,
    name: str | None,
    category: str | None,
    price: str | None,
    stock: int | None,
    description: str | None,
):
    """Update a product.

    PRODUCT can be a product name or ID.

    Examples:
        shopkeep product update "Tilapia" --price 13.00
    """
    service = ProductService(ctx.obj["store"])
    product_id = resolve_product_or_exit(ctx, service, product)

    changes = {}
    if name is not None:
        changes["name"] = name
    if category is not None:
        changes["category"] = category
    if price is not None:
        changes["price"] = _parse_price_or_exit(ctx, price)
    if stock is not None:
        changes["stock"] = stock
    if description is not None:
        changes["description"] = description

    if not changes:
        click.echo("Nothing to update.")
        return

    try:
        updated = service.update_product(product_id, **changes)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated product '{updated.name}'")


@product_group.command("delete")
@click.argument("product", metavar="PRODUCT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_product(ctx, product: str, yes: bool):
    """Delete a product.

    PRODUCT can be a product name or ID. Past sales and stock movements of
    the product are kept.
    """
    service = ProductService(ctx.obj["store"])
    product_id = resolve_product_or_exit(ctx, service, product)
    product_obj = service.get_product(product_id)

    if not yes and not click.confirm(f"Are you sure you want to delete product '{product_obj.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_product(product_id)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Deleted product '{product_obj.name}'")


def register_commands(cli):
    """Register product commands with main CLI."""
    cli.add_command(product_group, name="product")
