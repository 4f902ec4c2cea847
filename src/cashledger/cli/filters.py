"""CLI options shared by commands that work on a filtered view."""

from datetime import date
from typing import Any

import click

from cashledger.domain.entities import FilterCriteria
from cashledger.utils.date_parser import PERIODS, get_date_range, parse_date


def filter_options(command):
    """Attach date range, kind, payment mode and search options to a command."""
    options = [
        click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')"),
        click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')"),
        *[
            click.option(f"--{period}", period.replace("-", "_"), is_flag=True, help=f"Limit to {period.replace('-', ' ')}")
            for period in PERIODS
        ],
        click.option(
            "--kind",
            type=click.Choice(["all", "credit", "debit"], case_sensitive=False),
            default="all",
            show_default=True,
            help="Transaction kind",
        ),
        click.option(
            "--mode",
            type=click.Choice(["all", "cash", "online"], case_sensitive=False),
            default="all",
            show_default=True,
            help="Payment mode",
        ),
        click.option("--search", help="Case-insensitive text in remarks, ID, reference ID or counterparty"),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo("Error: Only one period option (--this-month, --last-month, ...) can be specified at a time.", err=True)
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo("Error: Period options cannot be combined with --start-date or --end-date.", err=True)
        ctx.exit(1)

    if selected:
        return get_date_range(selected[0])

    start = None
    end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    return start, end


def criteria_from_options(ctx, options: dict[str, Any]) -> FilterCriteria:
    """Build FilterCriteria from the keyword arguments added by ``filter_options``."""
    period_flags = {period: bool(options.get(period.replace("-", "_"))) for period in PERIODS}
    start, end = resolve_cli_date_range(
        ctx,
        start_date=options.get("start_date"),
        end_date=options.get("end_date"),
        period_flags=period_flags,
    )
    return FilterCriteria(
        start_date=start,
        end_date=end,
        kind=(options.get("kind") or "all").lower(),
        payment_mode=(options.get("mode") or "all").lower(),
        search_term=options.get("search") or None,
    )
