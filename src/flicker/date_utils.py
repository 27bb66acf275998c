"""Date arithmetic helpers for the picker. No state, no UI."""

from __future__ import annotations

import calendar
from collections.abc import Iterator
from datetime import date, datetime, timedelta

from .models import MonthGrid

DEFAULT_YEAR_HORIZON = 100


def normalize(value: date | datetime) -> date:
    """Drop any time-of-day component."""
    if isinstance(value, datetime):
        return value.date()
    return value


def today() -> date:
    return date.today()


def maybe_today(value: date | datetime | None) -> date:
    """Return the normalized value, or today when it is absent."""
    if value is None:
        return today()
    return normalize(value)


def is_today(value: date | None) -> bool:
    return same_day(value, today())


def same_day(a: date | None, b: date | None) -> bool:
    if a is None or b is None:
        return False
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def same_month(a: date | None, b: date | None) -> bool:
    if a is None or b is None:
        return False
    return (a.year, a.month) == (b.year, b.month)


def is_before(a: date | None, b: date | None) -> bool:
    if a is None or b is None:
        return False
    return normalize(a) < normalize(b)


def is_after(a: date | None, b: date | None) -> bool:
    if a is None or b is None:
        return False
    return normalize(a) > normalize(b)


def add_months(value: date, months: int) -> date:
    """Shift by whole months; the result is always the 1st of its month."""
    total = value.year * 12 + (value.month - 1) + months
    return date(total // 12, total % 12 + 1, 1)


def prev_month(value: date) -> date:
    return add_months(value, -1)


def next_month(value: date) -> date:
    return add_months(value, 1)


def month_start(value: date) -> date:
    return date(value.year, value.month, 1)


def days_in_month(value: date) -> int:
    return calendar.monthrange(value.year, value.month)[1]


def clamp_years_around(value: date, years: int) -> date:
    """Shift by ``years`` years, mapping Feb 29 onto Feb 28 when needed."""
    year = value.year + years
    day = min(value.day, calendar.monthrange(year, value.month)[1])
    return date(year, value.month, day)


def years_ago(value: date | None, years: int = DEFAULT_YEAR_HORIZON) -> date:
    return clamp_years_around(maybe_today(value), -years)


def years_after(value: date | None, years: int = DEFAULT_YEAR_HORIZON) -> date:
    return clamp_years_around(maybe_today(value), years)


def offset_today(value: date | None, months: int) -> date:
    """Return ``value`` untouched, or today shifted by ``months`` if absent."""
    if value is not None:
        return normalize(value)
    return add_months(today(), months)


def weekday_index(value: date) -> int:
    """Weekday with Sunday as 0 and Saturday as 6."""
    return value.isoweekday() % 7


def weekday_order(first_day_of_week: int) -> list[int]:
    """Column order of weekday indexes for a grid starting on ``first_day_of_week``."""
    return [(first_day_of_week + i) % 7 for i in range(7)]


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` to ``end`` inclusive, in either order."""
    if start > end:
        start, end = end, start
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def build_month_cells(month: date, first_day_of_week: int) -> tuple[date | None, ...]:
    if not 0 <= first_day_of_week <= 6:
        raise ValueError(f"first_day_of_week must be between 0 and 6, got {first_day_of_week}")

    first = month_start(month)
    total_days = days_in_month(first)
    last = first.replace(day=total_days)

    days_before = (weekday_index(first) - first_day_of_week + 7) % 7
    days_after = (first_day_of_week + 6 - weekday_index(last) + 7) % 7

    days = [first + timedelta(days=offset) for offset in range(total_days)]
    return tuple([None] * days_before + days + [None] * days_after)


def build_month_grids(month: date, first_day_of_week: int, view_count: int) -> tuple[MonthGrid, ...]:
    """Build ``view_count`` consecutive month grids starting at ``month``."""
    grids: list[MonthGrid] = []
    for index in range(view_count):
        current = add_months(month, index)
        grids.append(
            MonthGrid(
                month=current,
                first_day_of_week=first_day_of_week,
                cells=build_month_cells(current, first_day_of_week),
            )
        )
    return tuple(grids)


def build_month_range(start: date, end: date) -> tuple[date, ...]:
    """First-of-month dates from ``start``'s month to ``end``'s month inclusive."""
    months: list[date] = []
    current = month_start(start)
    last = month_start(end)
    while current <= last:
        months.append(current)
        current = next_month(current)
    return tuple(months)


__all__ = [
    "DEFAULT_YEAR_HORIZON",
    "add_months",
    "build_month_cells",
    "build_month_grids",
    "build_month_range",
    "clamp_years_around",
    "days_in_month",
    "is_after",
    "is_before",
    "is_today",
    "iter_days",
    "maybe_today",
    "month_start",
    "next_month",
    "normalize",
    "offset_today",
    "prev_month",
    "same_day",
    "same_month",
    "today",
    "weekday_index",
    "weekday_order",
    "years_after",
    "years_ago",
]
