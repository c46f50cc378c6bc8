"""Customer management commands."""

import click
from shopkeep.cli.error_handling import format_money, handle_domain_error
from shopkeep.cli.resolution import resolve_customer_or_exit
from shopkeep.domain.customer import CustomerService
from shopkeep.domain.errors import DomainError, PersistenceError
from shopkeep.domain.reports import ReportService


@click.group()
def customer_group():
    """Manage customers."""
    pass


@customer_group.command("add")
@click.argument("name", metavar="CUSTOMER_NAME")
@click.option("--phone", help="Phone number")
@click.option("--email", help="Email address")
@click.option("--address", help="Address")
@click.pass_context
def add_customer(ctx, name: str, phone: str | None, email: str | None, address: str | None):
    """Add a customer.

    Examples:
        shopkeep customer add "Ama Mensah" --phone 0244000000
    """
    service = CustomerService(ctx.obj["store"])
    try:
        created = service.create_customer(name=name, phone_number=phone, email=email, address=address)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created customer '{created.name}' (ID: {created.id})")


@customer_group.command("list")
@click.option("--search", help="Filter by name, phone or email")
@click.pass_context
def list_customers(ctx, search: str | None):
    """List customers with their total purchases."""
    store = ctx.obj["store"]
    customers = CustomerService(store).list_customers(search=search)
    if not customers:
        click.echo("No customers found." if search else "No customers added yet.")
        return

    click.echo("\nCustomers:")
    click.echo("-" * 80)
    for c in customers:
        last = f"{c.last_purchase_date:%Y-%m-%d}" if c.last_purchase_date else "never"
        click.echo(
            f"{c.id} | {c.name:20s} | {c.phone_number or '':12s} | "
            f"{format_money(c.total_purchases):>10s} | Last purchase: {last}"
        )

    if not search:
        active = ReportService(store).active_customers()
        click.echo(f"\n{len(customers)} customers, {len(active)} active this month")


@customer_group.command("update")
@click.argument("customer", metavar="CUSTOMER")
@click.option("--name", help="New name")
@click.option("--phone", help="New phone number")
@click.option("--email", help="New email address")
@click.option("--address", help="New address")
@click.pass_context
def update_customer(
    ctx,
    customer: str,
    name: str | None,
    phone: str | None,
    email: str | None,
    address: str | None,
):
    """Update a customer's contact details.

    CUSTOMER can be a customer name or ID.
    """
    service = CustomerService(ctx.obj["store"])
    customer_id = resolve_customer_or_exit(ctx, service, customer)

    changes = {
        field: value
        for field, value in (
            ("name", name),
            ("phone_number", phone),
            ("email", email),
            ("address", address),
        )
        if value is not None
    }
    if not changes:
        click.echo("Nothing to update.")
        return

    try:
        updated = service.update_customer(customer_id, **changes)
    except (DomainError, PersistenceError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated customer '{updated.name}'")


@customer_group.command("show")
@click.argument("customer", metavar="CUSTOMER")
@click.pass_context
def show_customer(ctx, customer: str):
    """Show a customer's details and purchase history figures."""
    store = ctx.obj["store"]
    service = CustomerService(store)
    customer_id = resolve_customer_or_exit(ctx, service, customer)
    found = service.get_customer(customer_id)
    stats = ReportService(store).customer_stats(customer_id)

    click.echo(f"{found.name} (ID: {found.id})")
    if found.phone_number:
        click.echo(f"  Phone: {found.phone_number}")
    if found.email:
        click.echo(f"  Email: {found.email}")
    if found.address:
        click.echo(f"  Address: {found.address}")
    click.echo(f"  Orders: {stats.order_count}")
    click.echo(f"  Total spent: {format_money(stats.total_spent)}")
    if stats.last_purchase_date is not None:
        click.echo(f"  Last purchase: {stats.last_purchase_date:%Y-%m-%d %H:%M}")


def register_commands(cli):
    """Register customer commands with main CLI."""
    cli.add_command(customer_group, name="customer")
