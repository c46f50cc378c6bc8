"""CLI helpers for report period resolution."""

import click

from shopkeep.domain.entities import ReportPeriod


def resolve_report_period(
    ctx,
    *,
    period_flags: dict[str, bool],
    default: ReportPeriod = ReportPeriod.DAILY,
) -> ReportPeriod:
    """Resolve the report period from mutually exclusive period flags."""
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo(
            "Error: Only one period option (--daily, --weekly, --monthly) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if not selected:
        return default
    return ReportPeriod(selected[0])
