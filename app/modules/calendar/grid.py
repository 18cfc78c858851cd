"""
Month grid generation and date helpers for the availability calendar.

The grid is always 6 weeks x 7 days, Sunday first, padded with the tail of the
previous month and the head of the next month. Holidays are the fixed solar
Korean public holidays only; lunar holidays (Seollal, Chuseok, Buddha's
Birthday) and substitute holidays are not modelled.
"""

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from app.config import settings
from app.core.exceptions import InvalidDateError

GRID_SIZE = 42

# Sunday-first labels, matching the grid column order
WEEKDAY_LABELS = ["일", "월", "화", "수", "목", "금", "토"]

# Monday-first labels used by the dashboard week and the legacy day lists
WEEK_LABELS = ["월", "화", "수", "목", "금", "토", "일"]

FIXED_HOLIDAYS = {
    (1, 1): "New Year's Day",
    (3, 1): "Independence Movement Day",
    (5, 5): "Children's Day",
    (6, 6): "Memorial Day",
    (8, 15): "Liberation Day",
    (10, 3): "National Foundation Day",
    (10, 9): "Hangul Day",
    (12, 25): "Christmas Day",
}

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class GridCell:
    date: date
    in_month: bool
    is_today: bool
    is_holiday: bool
    weekday: str


def format_date(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD string."""
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise InvalidDateError(f"Invalid date '{value}', expected YYYY-MM-DD")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDateError(f"Invalid date '{value}'")


def as_date_key(value) -> str:
    """Normalize a date or ISO string to the canonical YYYY-MM-DD key."""
    if isinstance(value, datetime):
        return format_date(value.date())
    if isinstance(value, date):
        return format_date(value)
    return format_date(parse_date(value))


def today() -> date:
    return datetime.now(ZoneInfo(settings.timezone)).date()


def _check_month(year: int, month_index: int) -> None:
    if not 0 <= month_index <= 11:
        raise InvalidDateError(f"Month index must be 0-11, got {month_index}")
    if not 1 <= year <= 9999:
        raise InvalidDateError(f"Year out of range: {year}")


def days_in_month(year: int, month_index: int) -> int:
    _check_month(year, month_index)
    return calendar.monthrange(year, month_index + 1)[1]


def shift_month(year: int, month_index: int, delta: int) -> Tuple[int, int]:
    """Move a (year, zero-based month) pair by delta months."""
    _check_month(year, month_index)
    total = year * 12 + month_index + delta
    return total // 12, total % 12


def month_grid(year: int, month_index: int) -> List[date]:
    """Return the 42 dates shown for the given month, Sunday first."""
    _check_month(year, month_index)
    first = date(year, month_index + 1, 1)
    leading = (first.weekday() + 1) % 7  # date.weekday() is Monday=0
    try:
        start = first - timedelta(days=leading)
        return [start + timedelta(days=i) for i in range(GRID_SIZE)]
    except OverflowError:
        raise InvalidDateError(f"Grid for {year}-{month_index + 1:02d} leaves the supported date range")


def holiday_name(value: date) -> Optional[str]:
    return FIXED_HOLIDAYS.get((value.month, value.day))


def is_holiday(value: date) -> bool:
    return (value.month, value.day) in FIXED_HOLIDAYS


def weekday_label(value: date) -> str:
    return WEEKDAY_LABELS[(value.weekday() + 1) % 7]


def grid_cells(year: int, month_index: int, current: Optional[date] = None) -> List[GridCell]:
    current = current or today()
    return [
        GridCell(
            date=d,
            in_month=(d.year == year and d.month == month_index + 1),
            is_today=(d == current),
            is_holiday=is_holiday(d),
            weekday=weekday_label(d),
        )
        for d in month_grid(year, month_index)
    ]


def week_start(value: date) -> date:
    """Monday of the week containing value."""
    return value - timedelta(days=value.weekday())


def current_week(current: Optional[date] = None) -> List[date]:
    """Monday..Sunday of the week containing current (defaults to today)."""
    start = week_start(current or today())
    return [start + timedelta(days=i) for i in range(7)]
