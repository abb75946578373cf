"""
Date helpers for the activity report.
Every calendar day in this project is a day in the America/Los_Angeles timezone.
"""
import datetime as dt
from typing import Optional
from zoneinfo import ZoneInfo

from errors import InvalidRange
from normalize.models import DateRange

REPORT_TIMEZONE = ZoneInfo('America/Los_Angeles')
LOOKBACK_DAYS = 14


def parse_day(value: str) -> dt.date:
    """Parse a YYYY-MM-DD string into a date. Raises InvalidRange on bad input."""
    if not value:
        raise InvalidRange("No date provided")
    try:
        return dt.date.fromisoformat(str(value).strip())
    except ValueError:
        raise InvalidRange(f"Invalid date: {value}")


def to_instant(day: dt.date, hour: int = 0, minute: int = 0, second: int = 0) -> str:
    """Format a wall-clock time on the given day in the report timezone as a GitHub search instant."""
    local = dt.datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=REPORT_TIMEZONE)
    return local.isoformat()


def resolve_range(date: Optional[str] = None, start_date: Optional[str] = None, end_date: Optional[str] = None) -> DateRange:
    """Build the DateRange for either a single date or a start/end pair.

    The caller enforces that the two forms are mutually exclusive.
    """
    if date:
        start = end = parse_day(date)
    else:
        start = parse_day(start_date)
        end = parse_day(end_date)
    if start > end:
        raise InvalidRange(f"Start date {start.isoformat()} is after end date {end.isoformat()}")
    lookback = start - dt.timedelta(days=LOOKBACK_DAYS)
    return DateRange(
        start=start,
        end=end,
        lookback_start=lookback,
        start_instant=to_instant(start),
        end_instant=to_instant(end, 23, 59, 59),
        lookback_instant=to_instant(lookback),
    )


def parse_timestamp(value: str) -> dt.datetime:
    """Parse a GitHub ISO-8601 timestamp ('2021-01-01T08:00:00Z' or with an offset)."""
    parsed = dt.datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def local_day(value: str) -> dt.date:
    """Return the report-timezone calendar day a GitHub timestamp falls on."""
    return parse_timestamp(value).astimezone(REPORT_TIMEZONE).date()


MONTH_ABBREVIATIONS = ['JAN', 'FEB', 'MAR', 'APR', 'MAY', 'JUN', 'JUL', 'AUG', 'SEP', 'OCT', 'NOV', 'DEC']
WEEKDAYS = ['MONDAY', 'TUESDAY', 'WEDNESDAY', 'THURSDAY', 'FRIDAY', 'SATURDAY', 'SUNDAY']


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = 'TH'
    else:
        suffix = {1: 'ST', 2: 'ND', 3: 'RD'}.get(n % 10, 'TH')
    return f"{n}{suffix}"


def day_label(day: dt.date) -> str:
    """Format a day the way the daily status dump writes it, e.g. 'JAN 1ST 2021 FRIDAY'."""
    return f"{MONTH_ABBREVIATIONS[day.month - 1]} {ordinal(day.day)} {day.year} {WEEKDAYS[day.weekday()]}"
