"""Materialized month list backing the swipeable month view."""

from __future__ import annotations

import logging
from datetime import date

from .date_utils import add_months, month_start, normalize, offset_today, same_month
from .grid_cache import GridCache
from .models import MonthGrid

logger = logging.getLogger(__name__)

WINDOW_PADDING_MONTHS = 3


class CalendarGrid:
    """Ordered first-of-month dates for the current window.

    The list is replaced wholesale whenever the requested window changes at
    month granularity, and reused untouched otherwise.
    """

    def __init__(self, cache: GridCache | None = None):
        self.cache = cache if cache is not None else GridCache()
        self._months: tuple[date, ...] = ()
        self._last_start: date | None = None
        self._last_end: date | None = None

    @property
    def months(self) -> list[date]:
        return list(self._months)

    @property
    def window(self) -> tuple[date | None, date | None]:
        return self._last_start, self._last_end

    def __len__(self) -> int:
        return len(self._months)

    @property
    def first(self) -> date | None:
        return self._months[0] if self._months else None

    @property
    def last(self) -> date | None:
        return self._months[-1] if self._months else None

    def ensure_window(self, start_date: date | None, end_date: date | None) -> bool:
        """Make sure the month list covers ``start_date``..``end_date``.

        Absent ends fall back to today -/+ WINDOW_PADDING_MONTHS. Returns True
        when the list was regenerated.
        """
        start = offset_today(start_date, -WINDOW_PADDING_MONTHS)
        end = offset_today(end_date, WINDOW_PADDING_MONTHS)
        if start > end:
            start, end = end, start

        if same_month(self._last_start, start) and same_month(self._last_end, end):
            return False

        self._months = self.cache.month_range(start, end)
        self._last_start = start
        self._last_end = end
        logger.debug(f"Month window regenerated: {start:%Y-%m} .. {end:%Y-%m} ({len(self._months)} months)")
        return True

    def recenter_around(self, center: date) -> bool:
        center = normalize(center)
        return self.ensure_window(
            add_months(center, -WINDOW_PADDING_MONTHS),
            add_months(center, WINDOW_PADDING_MONTHS),
        )

    def index_of_month(self, value: date | None) -> int:
        if value is None:
            return -1
        for index, month in enumerate(self._months):
            if same_month(month, value):
                return index
        return -1

    def month_at(self, index: int) -> date | None:
        if index < 0 or index >= len(self._months):
            return None
        return self._months[index]

    def cells_for_month(self, value: date, first_day_of_week: int, view_count: int) -> tuple[MonthGrid, ...]:
        return self.cache.grids(month_start(normalize(value)), first_day_of_week, view_count)

    def clear(self) -> None:
        self._months = ()
        self._last_start = None
        self._last_end = None
