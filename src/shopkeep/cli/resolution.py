"""CLI helpers for product and customer resolution."""

from __future__ import annotations

from datetime import datetime

import click
from shopkeep.domain.customer import CustomerService
from shopkeep.domain.product import ProductService
from shopkeep.utils.date_parser import parse_datetime
from shopkeep.utils.resolvers import resolve_customer, resolve_product


def resolve_product_or_exit(ctx: click.Context, product_service: ProductService, product: str) -> str:
    """Resolve product name or ID, or exit with a CLI error."""
    try:
        return resolve_product(product_service, product)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_customer_or_exit(ctx: click.Context, customer_service: CustomerService, customer: str) -> str:
    """Resolve customer name or ID, or exit with a CLI error."""
    try:
        return resolve_customer(customer_service, customer)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def parse_datetime_or_exit(ctx: click.Context, value: str | None) -> datetime | None:
    """Parse an optional --date option, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return parse_datetime(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid date format: {exc}", err=True)
        ctx.exit(1)
