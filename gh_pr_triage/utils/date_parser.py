"""Date parsing and validation utilities for pull request date windows."""

from datetime import datetime, timedelta, timezone

import typer

from ..github_client.models import DateWindow


def parse_date_input(date_str: str) -> datetime:
    """Parse various date formats into datetime objects.

    Supports:
    - ISO dates: 2024-01-01, 2024-01-01T10:00:00Z
    - Common formats: January 1, 2024, Jan 1 2024

    Args:
        date_str: Date string to parse

    Returns:
        Parsed datetime object (naive, interpreted as UTC downstream)

    Raises:
        ValueError: If date format is not recognized
    """
    formats = [
        "%Y-%m-%d",  # 2024-01-01
        "%Y-%m-%dT%H:%M:%SZ",  # 2024-01-01T10:00:00Z
        "%Y-%m-%dT%H:%M:%S",  # 2024-01-01T10:00:00
        "%B %d, %Y",  # January 1, 2024
        "%b %d, %Y",  # Jan 1, 2024
        "%B %d %Y",  # January 1 2024
        "%b %d %Y",  # Jan 1 2024
        "%Y/%m/%d",  # 2024/01/01
        "%m/%d/%Y",  # 01/01/2024
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt)
        except ValueError:
            continue

    raise ValueError(
        f"Unable to parse date '{date_str}'. "
        f"Supported formats include: YYYY-MM-DD, YYYY-MM-DDTHH:MM:SSZ, "
        f"'January 1, 2024', 'Jan 1 2024', MM/DD/YYYY"
    )


def _has_time_part(date_str: str) -> bool:
    # every supported format with a time of day uses the ISO "T" separator
    return "T" in date_str


def validate_date_range(start: datetime | None, end: datetime | None) -> None:
    """Validate date range logic.

    Both bounds are inclusive, so ``start == end`` is a valid one-instant window.

    Raises:
        ValueError: If start is after end
    """
    if start is None or end is None:
        return

    if start > end:
        raise ValueError(
            f"Start date ({start.strftime('%Y-%m-%d')}) must not be after "
            f"end date ({end.strftime('%Y-%m-%d')})"
        )


def relative_date_to_absolute(
    days: int | None = None, weeks: int | None = None, months: int | None = None
) -> datetime:
    """Convert relative dates to absolute UTC dates.

    Args:
        days: Number of days ago (optional)
        weeks: Number of weeks ago (optional)
        months: Number of months ago (optional)

    Returns:
        Datetime object representing the calculated past date

    Raises:
        ValueError: If multiple relative date options provided or values are invalid
    """
    provided_options = sum(1 for x in [days, weeks, months] if x is not None)
    if provided_options == 0:
        raise ValueError("Must provide one of: days, weeks, or months")
    if provided_options > 1:
        raise ValueError("Cannot combine multiple relative date options")

    now = datetime.now(timezone.utc)

    if days is not None:
        if days <= 0:
            raise ValueError("Days must be a positive integer")
        return now - timedelta(days=days)

    if weeks is not None:
        if weeks <= 0:
            raise ValueError("Weeks must be a positive integer")
        return now - timedelta(weeks=weeks)

    if months is not None:
        if months <= 0:
            raise ValueError("Months must be a positive integer")
        # Approximate months as 30 days each
        return now - timedelta(days=months * 30)

    raise ValueError("Invalid relative date parameters")


def build_date_window(
    created_after: str | None = None,
    created_before: str | None = None,
    last_days: int | None = None,
    last_weeks: int | None = None,
    last_months: int | None = None,
) -> DateWindow | None:
    """Validate CLI date options and build the creation-date window.

    A date-only --created-before covers that whole day: the upper bound is
    the last microsecond of the day.

    Returns:
        A ``DateWindow``, or None when no date option was given

    Raises:
        ValueError: If parameters are invalid or conflicting
    """
    has_relative = any(x is not None for x in [last_days, last_weeks, last_months])
    has_absolute = any(x is not None for x in [created_after, created_before])

    if has_relative and has_absolute:
        raise ValueError(
            "Cannot combine relative date options (--last-days/weeks/months) "
            "with absolute date options (--created-after/--created-before)"
        )

    if has_relative:
        try:
            start = relative_date_to_absolute(
                days=last_days, weeks=last_weeks, months=last_months
            )
        except ValueError as e:
            raise ValueError(f"Invalid relative date parameters: {e}")
        return DateWindow(start_at=start)

    if not has_absolute:
        return None

    start_dt = None
    end_dt = None

    if created_after:
        try:
            start_dt = parse_date_input(created_after)
        except ValueError as e:
            raise ValueError(f"Invalid --created-after date: {e}")

    if created_before:
        try:
            end_dt = parse_date_input(created_before)
        except ValueError as e:
            raise ValueError(f"Invalid --created-before date: {e}")
        if not _has_time_part(created_before):
            end_dt = end_dt + timedelta(days=1) - timedelta(microseconds=1)

    validate_date_range(start_dt, end_dt)

    now = datetime.now()
    end_day = None
    if end_dt is not None:
        end_day = end_dt.replace(hour=0, minute=0, second=0, microsecond=0)
    for label, value in (("Start", start_dt), ("End", end_day)):
        if value is not None and value > now:
            typer.echo(
                f"Warning: {label} date {value.strftime('%Y-%m-%d')} is in the future",
                err=True,
            )

    return DateWindow(start_at=start_dt, end_at=end_dt)
