"""Selected-date container with overflow-reset semantics."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import date

from .date_utils import normalize, same_day


class Selection:
    """Ordered, unique (by calendar day) selected dates.

    When adding would push the size past ``max_count`` the whole selection is
    cleared first, so a full range or batch restarts from the new date.
    """

    def __init__(self, max_count: int | None = None, keep_sorted: bool = True):
        self._dates: list[date] = []
        self.max_count = max_count
        self.keep_sorted = keep_sorted

    def __repr__(self) -> str:
        days = ", ".join(d.isoformat() for d in self._dates)
        return f"Selection([{days}], max_count={self.max_count})"

    def __len__(self) -> int:
        return len(self._dates)

    def __iter__(self) -> Iterator[date]:
        return iter(tuple(self._dates))

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, date):
            return False
        return self.contains(value)

    @property
    def dates(self) -> tuple[date, ...]:
        return tuple(self._dates)

    @property
    def size(self) -> int:
        return len(self._dates)

    @property
    def is_empty(self) -> bool:
        return not self._dates

    @property
    def is_full(self) -> bool:
        return self.max_count is not None and len(self._dates) >= self.max_count

    @property
    def first(self) -> date | None:
        return self._dates[0] if self._dates else None

    @property
    def last(self) -> date | None:
        return self._dates[-1] if self._dates else None

    def contains(self, value: date | None) -> bool:
        if value is None:
            return False
        return any(same_day(d, value) for d in self._dates)

    def force(self, values: Iterable[date]) -> "Selection":
        """Replace the contents: dedupe, truncate to max_count, then sort."""
        unique: list[date] = []
        for value in values:
            day = normalize(value)
            if not any(same_day(d, day) for d in unique):
                unique.append(day)
        if self.max_count is not None:
            unique = unique[: self.max_count]
        self._dates = unique
        self.sort()
        return self

    def add(self, value: date) -> None:
        day = normalize(value)
        if self.contains(day):
            return
        if self.max_count is not None and len(self._dates) + 1 > self.max_count:
            self._dates = []
        self._dates.append(day)
        if self.keep_sorted:
            self.sort()

    def remove(self, value: date) -> None:
        day = normalize(value)
        self._dates = [d for d in self._dates if not same_day(d, day)]

    def toggle(self, value: date) -> bool:
        """Remove ``value`` if present, otherwise add it. Returns True when added."""
        if self.contains(value):
            self.remove(value)
            return False
        self.add(value)
        return True

    def clear(self) -> None:
        self._dates = []

    def sort(self) -> "Selection":
        self._dates.sort()
        return self

    def truncate(self) -> "Selection":
        if self.max_count is not None and len(self._dates) > self.max_count:
            self._dates = self._dates[: self.max_count]
        return self

    def members_between(self, value: date | None) -> bool:
        """True when ``value`` lies strictly between the first and last entries."""
        if value is None or len(self._dates) < 2:
            return False
        day = normalize(value)
        return self._dates[0] < day < self._dates[-1]

    def is_range_start(self, value: date | None) -> bool:
        return same_day(self.first, value)

    def is_range_end(self, value: date | None) -> bool:
        return same_day(self.last, value)
