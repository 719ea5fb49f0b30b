"""Calendar helpers: "today" in the configured timezone and date parsing."""

from datetime import date, datetime
from typing import Optional, Union

import pytz
from dateutil import parser as date_parser

from networth.config.settings import get_settings


def get_timezone(name: Optional[str] = None) -> pytz.BaseTzInfo:
    """Return the pytz timezone for `name`, defaulting to the configured one."""
    return pytz.timezone(name or get_settings().timezone)


def now_local(tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """Return the current time in the configured timezone."""
    return datetime.now(tz or get_timezone())


def today_local(tz: Optional[pytz.BaseTzInfo] = None) -> date:
    """Return today's calendar date in the configured timezone."""
    return now_local(tz).date()


def start_of_day(day: date, tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """Return midnight of `day` as an aware datetime."""
    zone = tz or get_timezone()
    return zone.localize(datetime(day.year, day.month, day.day))


def parse_date(value: Union[str, date, datetime]) -> date:
    """
    Coerce a date-like value to a calendar date.

    Datetimes keep their own calendar date (no timezone shift); strings are
    parsed with dateutil, so both "2024-06-01" and "2024-06-01T10:00:00Z" work.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.parse(value).date()
