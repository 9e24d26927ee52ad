"""CLI helpers for date range resolution."""

from datetime import date

import click

from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.utils.date_parser import get_date_range, parse_date


def parse_date_or_exit(ctx: click.Context, value: str, label: str = "date") -> date:
    """Parse a date option, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as e:
        handle_domain_error(ctx, ValueError(f"Invalid {label}: {e}"))


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from a named period or explicit dates.

    Returns (None, None) when no filter was requested. When only one bound is
    given the other one is left open.
    """
    if period is not None:
        if start_date or end_date:
            handle_domain_error(
                ctx,
                ValueError("--period cannot be combined with --start-date or --end-date."),
            )
        return get_date_range(period)

    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None

    if start is not None and end is not None and start > end:
        handle_domain_error(ctx, ValueError("Start date must not be after end date."))

    return start, end
