"""Data models shared by the picker state engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class SelectionMode(str, Enum):
    """How taps accumulate into a selection."""

    SINGLE = "single"
    RANGE = "range"
    MANY = "many"


class ViewType(str, Enum):
    MONTH = "month"
    YEAR = "year"


class ScrollDirection(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ChangeSource(str, Enum):
    """What triggered the last value-change notification."""

    INITIALIZE = "initialize"
    SELECT_DATE = "select-date"
    SELECT_YEAR = "year-select"


class NavigationDirection(str, Enum):
    BACKWARD = "backward"
    FORWARD = "forward"


@dataclass(frozen=True)
class MonthGrid:
    """One month laid out on a 7-column grid.

    ``cells`` holds ``None`` for the padding slots before day 1 and after the
    last day, so its length is always a multiple of 7.
    """

    month: date
    first_day_of_week: int
    cells: tuple[date | None, ...]

    @property
    def weeks(self) -> list[tuple[date | None, ...]]:
        return [self.cells[i : i + 7] for i in range(0, len(self.cells), 7)]

    @property
    def days(self) -> list[date]:
        return [cell for cell in self.cells if cell is not None]

    @property
    def leading_blanks(self) -> int:
        count = 0
        for cell in self.cells:
            if cell is not None:
                break
            count += 1
        return count


@dataclass(frozen=True)
class DayState:
    """Flags a renderer needs for one day cell."""

    day: date
    selected: bool = False
    in_range: bool = False
    range_start: bool = False
    range_end: bool = False
    today: bool = False
    disabled: bool = False
