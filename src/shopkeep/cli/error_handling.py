"""CLI error handling helpers."""

import click

from shopkeep.domain.errors import DomainError, PersistenceError


def handle_domain_error(ctx: click.Context, error: DomainError | PersistenceError | ValueError) -> None:
    """Render a domain or storage error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def format_money(amount) -> str:
    """Format a currency amount for display."""
    return f"{amount:,.2f}"
