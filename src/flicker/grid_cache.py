"""Bounded memo for generated month grids and month ranges."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import TypeVar

from .date_utils import build_month_grids, build_month_range
from .models import MonthGrid

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 100

GridKey = tuple[int, int, int, int]
RangeKey = tuple[int, int, int, int]

T = TypeVar("T")


@dataclass
class CacheStats:
    """Counters for one cache table."""

    hits: int = 0
    misses: int = 0
    inserts: int = 0
    evictions: int = 0


class GridCache:
    """Memoize month grids and month lists, keyed by their generating parameters.

    Each table is capped at ``max_entries``. Eviction runs after every insert
    and drops the oldest-inserted keys first (FIFO, not LRU). Instances are
    meant to be owned by a single Store and are not thread-safe.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._grids: dict[GridKey, tuple[MonthGrid, ...]] = {}
        self._ranges: dict[RangeKey, tuple[date, ...]] = {}
        self.grid_stats = CacheStats()
        self.range_stats = CacheStats()

    def __len__(self) -> int:
        return len(self._grids) + len(self._ranges)

    @property
    def grid_keys(self) -> list[GridKey]:
        return list(self._grids)

    @property
    def range_keys(self) -> list[RangeKey]:
        return list(self._ranges)

    def grids(self, month: date, first_day_of_week: int, view_count: int) -> tuple[MonthGrid, ...]:
        key = (month.year, month.month, first_day_of_week, view_count)
        return self._lookup(
            self._grids,
            self.grid_stats,
            key,
            lambda: build_month_grids(month, first_day_of_week, view_count),
        )

    def month_range(self, start: date, end: date) -> tuple[date, ...]:
        key = (start.year, start.month, end.year, end.month)
        return self._lookup(
            self._ranges,
            self.range_stats,
            key,
            lambda: build_month_range(start, end),
        )

    def clear(self) -> None:
        self._grids.clear()
        self._ranges.clear()
        logger.debug("Grid cache cleared")

    def _lookup(
        self,
        table: dict[tuple[int, int, int, int], T],
        stats: CacheStats,
        key: tuple[int, int, int, int],
        build: Callable[[], T],
    ) -> T:
        if key in table:
            stats.hits += 1
            return table[key]

        stats.misses += 1
        value = build()
        table[key] = value
        stats.inserts += 1
        self._evict(table, stats)
        return value

    def _evict(self, table: dict, stats: CacheStats) -> None:
        overflow = len(table) - self.max_entries
        if overflow <= 0:
            return
        # dicts keep insertion order, so the first keys are the oldest
        for key in list(table)[:overflow]:
            del table[key]
        stats.evictions += overflow
        logger.debug(f"Evicted {overflow} cache entries (max={self.max_entries})")
