from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timezone

_MONTH_RE = re.compile(r"[0-9]{2}")
_YEAR_RE = re.compile(r"[0-9]{4}")


class InvalidDateFormat(ValueError):
    pass


def parse_month_year(value: str) -> date:
    """Parse ``MM-YYYY`` into the first day of that month.

    The month must be two digits (01-12) and the year four digits,
    so ``"7-25"`` is rejected along with ``"13-2025"`` and ``"abc-2025"``.
    """
    parts = (value or "").split("-")
    if len(parts) != 2:
        raise InvalidDateFormat("invalid date format, expected MM-YYYY")

    month_raw, year_raw = parts
    if not _MONTH_RE.fullmatch(month_raw):
        raise InvalidDateFormat("invalid month")
    month = int(month_raw)
    if month < 1 or month > 12:
        raise InvalidDateFormat("invalid month")

    if not _YEAR_RE.fullmatch(year_raw) or int(year_raw) < 1:
        raise InvalidDateFormat("invalid year")

    return date(int(year_raw), month, 1)


def month_bounds(value: date) -> tuple[date, date]:
    """Return the first and last day of ``value``'s month."""
    last_day = calendar.monthrange(value.year, value.month)[1]
    return value.replace(day=1), value.replace(day=last_day)


def as_utc_midnight(value: date) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
