"""Main CLI entry point."""

import logging

import click
from shopkeep.database.factories import create_sqlite_storage
from shopkeep.domain.store import EntityStore

# Import and register all commands at module level
from shopkeep.cli.commands import (
    product,
    inventory,
    sale,
    customer,
    expense,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SHOPKEEP_DB_PATH environment variable)",
    envvar="SHOPKEEP_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Shopkeep - Shop management for products, stock, sales and customers.

    Keeps the product catalog, stock ledger, sales, expenses and customer
    roster in a local database and derives dashboard figures and period
    reports from them.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)

    # Open storage only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        storage = create_sqlite_storage(database_path=db_path)
        storage.connect()
        ctx.call_on_close(storage.disconnect)
        store = EntityStore(storage)
        store.load()
        ctx.obj["store"] = store


# Register all commands
product.register_commands(cli)
inventory.register_commands(cli)
sale.register_commands(cli)
customer.register_commands(cli)
expense.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
