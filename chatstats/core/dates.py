"""
Calendar helpers for the daily reports.

Ranges are walked one calendar date at a time, so a day that is 23 or 25
hours long because of a DST change still yields exactly one entry.
"""
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Iterator, Optional, Tuple

from dateutil import parser as date_parser

from chatstats.core.errors import ParseError

DAY_START = time(0, 0, 0)
DAY_END = time(23, 59, 59)


def today(tz: Optional[tzinfo] = None) -> date:
    """Current calendar date in ``tz``, or in the server's local zone."""
    return datetime.now(tz).date()


def parse_date(value: Any, tz: Optional[tzinfo] = None) -> date:
    """
    Parse a date-like value into a calendar date.

    Accepts ``date``/``datetime`` objects and any string dateutil can
    read: ``2021-01-05``, ``20210105``, ``2021/01/05``, ``Jan 5 2021``,
    ISO-8601 datetimes with or without offset. Fields missing from the
    string are taken from today. Offset-aware values are moved into
    ``tz`` (local zone when ``None``) before the date is taken.

    Raises:
        ParseError: if the value is empty or not understood
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return value
    else:
        if not isinstance(value, str) or not value.strip():
            raise ParseError(f"Invalid date: {value!r}")
        try:
            parsed = date_parser.parse(value.strip())
        except (ValueError, OverflowError) as e:
            # ParserError is a ValueError; out-of-range fields raise ValueError too
            raise ParseError(f"Invalid date: {value!r}") from e

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz)
    return parsed.date()


def day_bounds(start: date, end: date) -> Tuple[datetime, datetime]:
    """Inclusive timestamps ``start 00:00:00`` and ``end 23:59:59``."""
    return datetime.combine(start, DAY_START), datetime.combine(end, DAY_END)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from ``start`` to ``end`` inclusive, ascending."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
