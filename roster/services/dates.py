"""Calendar-date helpers shared by the engine and its adapters."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Union

import pandas as pd


DateLike = Union[date, datetime, str]

ISO_FORMAT = "%Y-%m-%d"

DAYS_IN_WEEK = 7


def parse_calendar_date(value: DateLike | None) -> Optional[date]:
    """
    Parse a calendar date, returning None when it cannot be parsed.

    Args:
        value: date/datetime instance or a YYYY-MM-DD string

    Returns:
        The calendar date, or None for blank or invalid input
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    ts = pd.to_datetime(text, format=ISO_FORMAT, errors="coerce")
    if pd.isna(ts):
        return None
    return ts.date()


def parse_week_start(value: DateLike) -> date:
    """
    Parse the week start date, failing fast on invalid input.

    Raises:
        ValueError: If the value is not a valid calendar date
    """
    parsed = parse_calendar_date(value)
    if parsed is None:
        raise ValueError(f"Invalid week start date: {value!r} (expected YYYY-MM-DD)")
    return parsed


def day_date(week_start: date, day_offset: int) -> date:
    return week_start + timedelta(days=day_offset)


def to_iso(d: date) -> str:
    return d.strftime(ISO_FORMAT)


def next_monday(from_date: date | None = None) -> date:
    """Return from_date if it is a Monday, else the following Monday."""
    d = from_date or date.today()
    return d + timedelta(days=(7 - d.weekday()) % 7)
