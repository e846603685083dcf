"""
Date and time parsing helpers.

Punches and filed requests arrive with dates in several shapes
(``MM/DD/YYYY`` from the biometric export, ISO strings from stored
requests, real ``date``/``datetime`` objects from Python callers).
Everything is canonicalised to ``datetime.date`` and naive local
``datetime`` before any comparison.
"""
import re
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

import pytz

from cutoff_payroll.config import settings

_US_DATE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_CLOCK_12H = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?\s*(AM|PM)$", re.IGNORECASE)
_CLOCK_24H = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_US_DATE_TIME = re.compile(
    r"(\d{1,2}/\d{1,2}/\d{4})\s+(\d{1,2}:\d{2}(?::\d{2})?(?:\s*(?:AM|PM))?)",
    re.IGNORECASE,
)


def _local_zone():
    return pytz.timezone(settings.TIMEZONE)


def to_local_naive(moment: datetime) -> datetime:
    """Convert an aware datetime to naive wall-clock time in the configured zone."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(_local_zone()).replace(tzinfo=None)


def _us_date(text: str) -> Optional[date]:
    match = _US_DATE.search(text)
    if not match:
        return None
    month, day, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_clock(value: Any) -> Optional[time]:
    """Parse ``HH:MM[:SS]`` (24h) or ``H:MM[:SS] AM/PM`` into a ``time``."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()

    match = _CLOCK_12H.match(text)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        second = int(match.group(3) or 0)
        meridiem = match.group(4).upper()
        if meridiem == "PM" and hour != 12:
            hour += 12
        if meridiem == "AM" and hour == 12:
            hour = 0
    else:
        match = _CLOCK_24H.match(text)
        if not match:
            return None
        hour, minute = int(match.group(1)), int(match.group(2))
        second = int(match.group(3) or 0)

    if 0 <= hour < 24 and 0 <= minute < 60 and 0 <= second < 60:
        return time(hour, minute, second)
    return None


def parse_instant(value: Any, on: Optional[date] = None) -> Optional[datetime]:
    """
    Parse a punch instant into a naive local ``datetime``.

    Accepts datetimes, ISO-8601 strings, ``MM/DD/YYYY HH:MM[:SS] [AM/PM]``
    strings and, when ``on`` is given, bare clock strings such as ``"08:15"``.
    Returns ``None`` for anything unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, time):
        return datetime.combine(on, value) if on else None
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    combo = _US_DATE_TIME.search(text)
    if combo:
        day = _us_date(combo.group(1))
        clock = parse_clock(combo.group(2))
        if day and clock:
            return datetime.combine(day, clock)
        return None

    clock = parse_clock(text)
    if clock is not None:
        return datetime.combine(on, clock) if on else None

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return to_local_naive(parsed)


def parse_date(value: Any) -> Optional[date]:
    """Canonicalise a calendar date; ``None`` when it cannot be read."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_local_naive(value).date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    match = _ISO_DATE.match(text)
    if match:
        try:
            return date(*(int(part) for part in match.groups()))
        except ValueError:
            return None
    if "/" in text:
        return _us_date(text)

    instant = parse_instant(text)
    return instant.date() if instant else None


def minute_of_day(moment) -> int:
    return moment.hour * 60 + moment.minute


def at_clock(moment: datetime, clock: time) -> datetime:
    """Same calendar day as ``moment``, at ``clock``."""
    return moment.replace(hour=clock.hour, minute=clock.minute, second=0, microsecond=0)


def month_add(day: date, delta: int) -> date:
    """First day of the month ``delta`` months away from ``day``."""
    index = day.year * 12 + (day.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def count_working_days(start: date, end: date) -> int:
    """Weekdays (Mon-Fri) between ``start`` and ``end`` inclusive."""
    days = 0
    current = start
    while current <= end:
        if current.weekday() < 5:
            days += 1
        current += timedelta(days=1)
    return days
