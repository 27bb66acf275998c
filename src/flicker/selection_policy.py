"""Tap handling rules for each selection mode."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from .date_utils import iter_days, normalize
from .models import SelectionMode
from .selection import Selection

logger = logging.getLogger(__name__)

DisabledPredicate = Callable[[date], bool]
ValueChangeCallback = Callable[[list[date]], None]


def _never_disabled(_day: date) -> bool:
    return False


class SelectionPolicy:
    """Decide what a tap does to a :class:`Selection`.

    ``on_value_change`` is called synchronously, once per tap, with an
    ascending copy of the resulting selection. It must not call back into
    the owning Store.
    """

    def __init__(
        self,
        selection: Selection,
        mode: SelectionMode = SelectionMode.SINGLE,
        disabled_date: DisabledPredicate | None = None,
        on_value_change: ValueChangeCallback | None = None,
    ):
        self.selection = selection
        self.mode = mode
        self.disabled_date = disabled_date or _never_disabled
        self.on_value_change = on_value_change

    def is_disabled(self, day: date) -> bool:
        return bool(self.disabled_date(day))

    def would_create_invalid_range(self, day: date) -> bool:
        """Check whether pairing ``day`` with the lone range anchor spans a disabled day."""
        if self.mode != SelectionMode.RANGE or self.selection.size != 1:
            return False
        anchor = self.selection.first
        if anchor is None:
            return False
        return any(self.is_disabled(current) for current in iter_days(anchor, normalize(day)))

    def on_select_date(self, day: date) -> list[date]:
        day = normalize(day)
        # removals are never re-checked against the disabled predicate
        if not self.selection.contains(day) and self.would_create_invalid_range(day):
            logger.debug(f"Disabled day between {self.selection.first} and {day}; starting a new range")
            self.selection.clear()

        added = self.selection.toggle(day)
        if self.mode != SelectionMode.SINGLE:
            self.selection.sort()
        logger.debug(f"{'Selected' if added else 'Deselected'} {day} ({self.mode.value}): {list(self.selection.dates)}")

        result = list(self.selection.dates)
        self.notify(result)
        return result

    def notify(self, dates: list[date] | None = None) -> None:
        if self.on_value_change is None:
            return
        snapshot = sorted(self.selection.dates) if dates is None else sorted(dates)
        self.on_value_change(snapshot)
