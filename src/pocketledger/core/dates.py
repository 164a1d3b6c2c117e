"""Calendar date utilities."""

from datetime import date, datetime, timedelta
from typing import Optional, Union

import pytz
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from pocketledger.config.settings import get_settings


def local_tz() -> pytz.BaseTzInfo:
    """Return the configured ledger timezone."""
    return pytz.timezone(get_settings().timezone)


def now_local() -> datetime:
    """Return current time in the ledger timezone."""
    return datetime.now(local_tz())


def today_local() -> date:
    """Return today's calendar date in the ledger timezone."""
    return now_local().date()


def parse_date(value: Union[str, date, datetime]) -> date:
    """
    Parse a calendar date.

    Accepts date objects, datetimes (time component dropped) and strings in
    any format dateutil understands.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.parse(value).date()


def week_bounds(day: date) -> tuple[date, date]:
    """Return the Monday-Sunday week containing ``day``."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a month."""
    start = date(year, month, 1)
    return start, start + relativedelta(months=1) - timedelta(days=1)


def year_bounds(year: int) -> tuple[date, date]:
    """Return the first and last day of a year."""
    return date(year, 1, 1), date(year, 12, 31)


def days_ending(end: Optional[date], count: int) -> list[date]:
    """Return ``count`` consecutive days ending at ``end`` (oldest first)."""
    end = end or today_local()
    return [end - timedelta(days=offset) for offset in range(count - 1, -1, -1)]
