"""Picker state: selection, display month and view type.

The Store is the single entry point a host UI talks to. It owns one
:class:`Selection`, one :class:`CalendarGrid` and one :class:`GridCache`;
nothing is shared between Store instances.

All operations are synchronous. ``on_value_change`` fires in-line, once per
mutating call, and must not call back into the Store.
"""

from __future__ import annotations

import logging
from datetime import MAXYEAR, MINYEAR, date

from .calendar_grid import CalendarGrid
from .config import ConfigurationError, PickerConfig
from .date_utils import (
    add_months,
    days_in_month,
    is_after,
    is_before,
    is_today,
    month_start,
    next_month,
    normalize,
    same_month,
    today,
    years_after,
    years_ago,
)
from .grid_cache import GridCache
from .models import (
    ChangeSource,
    DayState,
    MonthGrid,
    NavigationDirection,
    ScrollDirection,
    SelectionMode,
    ViewType,
)
from .selection import Selection
from .selection_policy import SelectionPolicy

logger = logging.getLogger(__name__)


def derive_selection_count(mode: SelectionMode, selection_count: int | None) -> int:
    """Resolve the effective selection limit for ``mode``.

    Mismatches are coerced and logged, never raised.
    """
    if mode == SelectionMode.SINGLE:
        if selection_count is not None and selection_count != 1:
            logger.warning(f"selection_count must be 1 for single mode (got {selection_count}); using 1")
        return 1
    if mode == SelectionMode.RANGE:
        if selection_count is not None and selection_count != 2:
            logger.warning(f"selection_count should be 2 for range mode (got {selection_count})")
        return selection_count if selection_count is not None else 2
    if selection_count is None:
        logger.warning("selection_count is not set for many mode; using 1")
        return 1
    return selection_count


class Store:
    """Selection and calendar state for one date picker instance."""

    def __init__(self, config: PickerConfig | None = None, cache: GridCache | None = None):
        self.cache = cache if cache is not None else GridCache()
        self.grid = CalendarGrid(self.cache)
        self.selection = Selection(max_count=1, keep_sorted=False)
        self.policy = SelectionPolicy(self.selection)

        self.mode = SelectionMode.SINGLE
        self.selection_count = 1
        self.start_date: date | None = None
        self.end_date: date | None = None
        self.first_day_of_week = 0
        self._view_count: int | None = None
        self.scroll_direction = ScrollDirection.HORIZONTAL
        self.view_type = ViewType.MONTH
        self.display = today()
        self.change_source = ChangeSource.INITIALIZE
        self._fingerprint: tuple | None = None

        if config is not None:
            self.initialize(config)
        else:
            self._sync_grid(reset=True)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def initialize(self, config: PickerConfig) -> None:
        """Apply ``config`` wholesale, resetting selection and display.

        Raises ConfigurationError without touching the current state when the
        config is invalid.
        """
        config.validate()
        try:
            mode = SelectionMode(config.mode)
            scroll_direction = ScrollDirection(config.scroll_direction or ScrollDirection.HORIZONTAL)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        start_date = normalize(config.start_date) if config.start_date is not None else None
        end_date = normalize(config.end_date) if config.end_date is not None else None
        selection_count = derive_selection_count(mode, config.selection_count)

        self.mode = mode
        self.selection_count = selection_count
        self.start_date = start_date
        self.end_date = end_date
        self.first_day_of_week = config.first_day_of_week if config.first_day_of_week is not None else 0
        self._view_count = config.view_count
        self.scroll_direction = scroll_direction
        self._apply_callbacks(config)

        self.selection.max_count = selection_count
        self.selection.keep_sorted = mode != SelectionMode.SINGLE
        self.selection.force(config.value)
        self.policy.mode = mode

        self.change_source = ChangeSource.INITIALIZE
        self._fingerprint = config.fingerprint
        self._position_display()
        self._sync_grid(reset=True)
        logger.debug(
            f"Initialized: mode={mode.value} count={selection_count} "
            f"window={start_date}..{end_date} display={self.display}"
        )

    def reconfigure(self, config: PickerConfig) -> bool:
        """Apply ``config`` from a host rebuild.

        Only a change in structural fields re-initializes; otherwise just the
        disabled predicate and callbacks are refreshed so the user's selection
        survives. Returns True when the Store was re-initialized.
        """
        if config.fingerprint != self._fingerprint:
            self.initialize(config)
            return True
        self._apply_callbacks(config)
        return False

    def _apply_callbacks(self, config: PickerConfig) -> None:
        self.policy.disabled_date = config.disabled_date or (lambda _day: False)
        self.policy.on_value_change = config.on_value_change

    def _position_display(self) -> None:
        candidate = self.selection.first
        if candidate is not None and is_before(candidate, self.start_date):
            candidate = self.start_date
        if candidate is None:
            candidate = self.start_date
        if candidate is None:
            candidate = self.display
        self.display = candidate

    def _sync_grid(self, reset: bool = False) -> None:
        if reset or not len(self.grid):
            self.grid.ensure_window(self.start_date, self.end_date)
        if self.grid.index_of_month(self.display) == -1:
            self.grid.recenter_around(self.display)

    def _needs_recenter(self, index: int) -> bool:
        if index == -1:
            return True
        more_before = self.start_date is None or is_after(self.grid.first, month_start(self.start_date))
        more_after = self.end_date is None or is_before(self.grid.last, month_start(self.end_date))
        at_start = index == 0
        at_end = index + self.view_count >= len(self.grid)
        return (at_start and more_before) or (at_end and more_after)

    def close(self) -> None:
        """Release the cached grids; the Store should not be used afterwards."""
        self.cache.clear()
        self.grid.clear()
        self.selection.clear()
        self.policy.on_value_change = None

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def view_count(self) -> int:
        if self.view_type == ViewType.YEAR:
            return 1
        if self.scroll_direction == ScrollDirection.VERTICAL:
            return 2
        if self._view_count not in (1, 2):
            return 1
        return self._view_count

    @property
    def is_month_view(self) -> bool:
        return self.view_type == ViewType.MONTH

    @property
    def is_year_view(self) -> bool:
        return self.view_type == ViewType.YEAR

    @property
    def is_vertical(self) -> bool:
        return self.scroll_direction == ScrollDirection.VERTICAL

    @property
    def next_display(self) -> date:
        return next_month(self.display)

    @property
    def displays(self) -> list[date]:
        """First-of-month dates visible in the current view."""
        return [add_months(self.display, index) for index in range(self.view_count)]

    @property
    def selected_dates(self) -> list[date]:
        return list(self.selection.dates)

    @property
    def start_year(self) -> int:
        start = years_ago(self.start_date).year
        return start - 1 if self.end_year - start == 1 else start

    @property
    def end_year(self) -> int:
        return years_after(self.end_date).year

    def is_year_disabled(self, year: int) -> bool:
        return year < self.start_year or year > self.end_year

    def is_disabled(self, value: date) -> bool:
        day = normalize(value)
        if is_before(day, self.start_date) or is_after(day, self.end_date):
            return True
        return self.policy.is_disabled(day)

    def is_selectable(self, value: date | None) -> bool:
        if value is None:
            return False
        day = normalize(value)
        return not (is_before(day, self.start_date) or is_after(day, self.end_date))

    def day_state(self, value: date) -> DayState:
        day = normalize(value)
        is_range = self.mode == SelectionMode.RANGE
        has_selection = not self.selection.is_empty
        return DayState(
            day=day,
            selected=self.selection.contains(day),
            in_range=is_range and self.selection.members_between(day),
            range_start=is_range and has_selection and self.selection.is_range_start(day),
            range_end=is_range and has_selection and self.selection.is_range_end(day),
            today=is_today(day),
            disabled=self.is_disabled(day),
        )

    def cells(self) -> tuple[MonthGrid, ...]:
        """Grids for the months currently on screen."""
        return self.grid.cells_for_month(self.display, self.first_day_of_week, self.view_count)

    def cells_for_month(self, value: date, view_count: int | None = None) -> tuple[MonthGrid, ...]:
        count = view_count if view_count is not None else self.view_count
        return self.grid.cells_for_month(value, self.first_day_of_week, count)

    def index_of_month(self, value: date | None) -> int:
        return self.grid.index_of_month(value)

    def month_at(self, index: int) -> date | None:
        return self.grid.month_at(index)

    @property
    def display_index(self) -> int:
        return self.grid.index_of_month(self.display)

    def can_navigate(self, direction: NavigationDirection) -> bool:
        """False when the display month already sits on the bound in ``direction``."""
        if NavigationDirection(direction) == NavigationDirection.BACKWARD:
            if self.start_date is None:
                return True
            return not same_month(self.display, self.start_date)
        if self.end_date is None:
            return True
        return not same_month(self.display, self.end_date)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def switch_view(self) -> ViewType:
        self.view_type = ViewType.YEAR if self.view_type == ViewType.MONTH else ViewType.MONTH
        return self.view_type

    def select_year(self, year: int) -> None:
        """Jump to ``year`` from the year view and return to the month view."""
        self.view_type = ViewType.MONTH
        if self.display.year == year:
            return
        if not MINYEAR <= year <= MAXYEAR:
            logger.debug(f"Ignoring year outside the supported calendar: {year}")
            return

        self.selection.clear()
        self.policy.notify()
        self.change_source = ChangeSource.SELECT_YEAR

        day = min(self.display.day, days_in_month(date(year, self.display.month, 1)))
        self.display = date(year, self.display.month, day)
        self._sync_grid()
        logger.debug(f"Year selected: {year}, display={self.display}")

    def on_select_date(self, value: date | None) -> list[date]:
        """Handle a tap on a day cell and return the resulting selection."""
        if value is None:
            return self.selected_dates
        day = normalize(value)
        if not self.is_selectable(day):
            logger.debug(f"Ignoring tap outside window: {day}")
            return self.selected_dates

        result = self.policy.on_select_date(day)
        self.change_source = ChangeSource.SELECT_DATE
        first = self.selection.first
        if first is not None:
            self.display = first
            self._sync_grid()
        return result

    def navigate_months(self, delta: int) -> date:
        """Move the display by ``delta`` months, stopping at the window bounds."""
        target = add_months(self.display, delta)
        if self.start_date is not None and target < month_start(self.start_date):
            target = month_start(self.start_date)
        if self.end_date is not None and target > month_start(self.end_date):
            target = month_start(self.end_date)

        self.display = target
        if self._needs_recenter(self.grid.index_of_month(target)):
            self.grid.recenter_around(target)
        return self.display
