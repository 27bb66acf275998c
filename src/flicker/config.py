"""Configuration management."""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .models import ScrollDirection, SelectionMode

VALID_VIEW_COUNTS = (1, 2)


class ConfigurationError(ValueError):
    """Raised when a picker configuration cannot be applied."""


def _parse_date(raw: str, name: str) -> date:
    try:
        return date.fromisoformat(raw.strip())
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an ISO date (YYYY-MM-DD), got {raw!r}") from e


def _optional_date(name: str) -> date | None:
    raw = os.environ.get(name, "").strip()
    return _parse_date(raw, name) if raw else None


def _optional_int(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _parse_enum(enum_cls: Any, raw: str, name: str) -> Any:
    try:
        return enum_cls(raw.strip().lower())
    except ValueError as e:
        choices = ", ".join(member.value for member in enum_cls)
        raise ConfigurationError(f"{name} must be one of: {choices} (got {raw!r})") from e


def parse_date_list(raw: str, name: str = "FLICKER_VALUE") -> tuple[date, ...]:
    """Parse comma or whitespace separated ISO dates."""
    tokens = [token for token in re.split(r"[,\s]+", str(raw or "").strip()) if token]
    return tuple(_parse_date(token, name) for token in tokens)


@dataclass(frozen=True)
class PickerConfig:
    """Date picker configuration.

    ``None`` means "use the default": single mode, unbounded window, Sunday as
    the first day of the week, one month per view, horizontal scrolling and
    the mode's own selection count.
    """

    mode: SelectionMode = SelectionMode.SINGLE
    value: tuple[date, ...] = ()
    start_date: date | None = None
    end_date: date | None = None
    first_day_of_week: int | None = None
    view_count: int | None = None
    scroll_direction: ScrollDirection | None = None
    selection_count: int | None = None
    disabled_date: Callable[[date], bool] | None = field(default=None, compare=False)
    on_value_change: Callable[[list[date]], None] | None = field(default=None, compare=False)

    @property
    def fingerprint(self) -> tuple:
        """Structural fields; a change here resets the picker state."""
        return (
            self.mode,
            self.start_date,
            self.end_date,
            self.first_day_of_week,
            self.view_count,
            self.scroll_direction,
            self.selection_count,
        )

    def validate(self) -> None:
        if self.start_date is not None and self.end_date is not None and self.start_date > self.end_date:
            raise ConfigurationError(
                f"start_date ({self.start_date}) must be before or equal to end_date ({self.end_date})"
            )
        if self.view_count is not None and self.view_count not in VALID_VIEW_COUNTS:
            raise ConfigurationError(f"view_count must be 1 or 2, got {self.view_count}")
        if self.first_day_of_week is not None and not 0 <= self.first_day_of_week <= 6:
            raise ConfigurationError(f"first_day_of_week must be between 0 and 6, got {self.first_day_of_week}")
        if self.selection_count is not None and self.selection_count < 1:
            raise ConfigurationError(f"selection_count must be positive, got {self.selection_count}")

    @classmethod
    def from_env(cls) -> "PickerConfig":
        mode_raw = os.environ.get("FLICKER_MODE", "").strip()
        scroll_raw = os.environ.get("FLICKER_SCROLL_DIRECTION", "").strip()
        return cls(
            mode=_parse_enum(SelectionMode, mode_raw, "FLICKER_MODE") if mode_raw else SelectionMode.SINGLE,
            value=parse_date_list(os.environ.get("FLICKER_VALUE", "")),
            start_date=_optional_date("FLICKER_START_DATE"),
            end_date=_optional_date("FLICKER_END_DATE"),
            first_day_of_week=_optional_int("FLICKER_FIRST_DAY_OF_WEEK"),
            view_count=_optional_int("FLICKER_VIEW_COUNT"),
            scroll_direction=(
                _parse_enum(ScrollDirection, scroll_raw, "FLICKER_SCROLL_DIRECTION") if scroll_raw else None
            ),
            selection_count=_optional_int("FLICKER_SELECTION_COUNT"),
        )

    @classmethod
    def load(cls, env_file: Path | None = None) -> "PickerConfig":
        """Load configuration from environment variables."""
        if env_file:
            load_dotenv(env_file, override=True)
        else:
            load_dotenv(override=True)
        return cls.from_env()
