"""Tests for date_utils module."""

from datetime import date, datetime

import pytest

from flicker.date_utils import (
    add_months,
    build_month_cells,
    build_month_grids,
    build_month_range,
    clamp_years_around,
    days_in_month,
    is_after,
    is_before,
    is_today,
    iter_days,
    maybe_today,
    normalize,
    offset_today,
    same_day,
    same_month,
    weekday_index,
    weekday_order,
    years_after,
    years_ago,
)


class TestComparisons:
    """Tests for same-day / same-month / ordering helpers."""

    def test_same_day_ignores_time(self):
        """Test time-of-day does not affect same-day equality."""
        assert same_day(datetime(2024, 6, 15, 23, 59), date(2024, 6, 15))

    def test_same_day_different_days(self):
        assert not same_day(date(2024, 6, 15), date(2024, 6, 16))

    def test_same_month(self):
        assert same_month(date(2024, 6, 1), date(2024, 6, 30))
        assert not same_month(date(2024, 6, 1), date(2023, 6, 1))

    def test_absent_inputs_are_false(self):
        """Test None never raises and always compares False."""
        assert not same_day(None, date(2024, 1, 1))
        assert not same_month(date(2024, 1, 1), None)
        assert not is_before(None, date(2024, 1, 1))
        assert not is_after(date(2024, 1, 1), None)

    def test_before_after(self):
        assert is_before(date(2024, 1, 1), date(2024, 1, 2))
        assert is_after(datetime(2024, 1, 2, 8, 0), date(2024, 1, 1))
        assert not is_before(date(2024, 1, 1), datetime(2024, 1, 1, 12, 0))


class TestMonthArithmetic:
    """Tests for month navigation helpers."""

    def test_add_months_rolls_year(self):
        """Test day is normalized to 1 and the year rolls over."""
        assert add_months(date(2024, 12, 15), 1) == date(2025, 1, 1)

    def test_add_months_backwards(self):
        assert add_months(date(2024, 1, 31), -1) == date(2023, 12, 1)
        assert add_months(date(2024, 3, 31), -14) == date(2023, 1, 1)

    def test_add_zero_months_normalizes_day(self):
        assert add_months(date(2024, 5, 20), 0) == date(2024, 5, 1)

    @pytest.mark.parametrize(
        "value,expected",
        [
            (date(2024, 2, 10), 29),
            (date(2023, 2, 10), 28),
            (date(1900, 2, 1), 28),
            (date(2000, 2, 1), 29),
            (date(2024, 4, 1), 30),
            (date(2024, 12, 1), 31),
        ],
    )
    def test_days_in_month(self, value, expected):
        assert days_in_month(value) == expected

    def test_clamp_years_around_leap_day(self):
        """Test Feb 29 maps onto Feb 28 in a non-leap year."""
        assert clamp_years_around(date(2024, 2, 29), 1) == date(2025, 2, 28)
        assert clamp_years_around(date(2024, 2, 29), -100) == date(1924, 2, 29)

    def test_year_horizon_defaults(self, fixed_today):
        assert years_ago(None) == date(1924, 6, 15)
        assert years_after(None) == date(2124, 6, 15)
        assert years_after(date(2030, 1, 1), 5) == date(2035, 1, 1)


class TestTodayHelpers:
    def test_normalize_datetime(self):
        assert normalize(datetime(2024, 6, 15, 10, 30)) == date(2024, 6, 15)
        assert type(normalize(datetime(2024, 6, 15, 10, 30))) is date

    def test_maybe_today(self, fixed_today):
        assert maybe_today(None) == fixed_today
        assert maybe_today(datetime(2020, 1, 2, 3, 4)) == date(2020, 1, 2)

    def test_is_today(self, fixed_today):
        assert is_today(date(2024, 6, 15))
        assert not is_today(None)

    def test_offset_today(self, fixed_today):
        """Test offset only applies when no date is given."""
        assert offset_today(None, -3) == date(2024, 3, 1)
        assert offset_today(None, 3) == date(2024, 9, 1)
        assert offset_today(date(2020, 5, 5), 3) == date(2020, 5, 5)


class TestWeekdays:
    def test_weekday_index_sunday_is_zero(self):
        assert weekday_index(date(2024, 1, 7)) == 0
        assert weekday_index(date(2024, 1, 1)) == 1
        assert weekday_index(date(2024, 1, 6)) == 6

    def test_weekday_order(self):
        assert weekday_order(0) == [0, 1, 2, 3, 4, 5, 6]
        assert weekday_order(1) == [1, 2, 3, 4, 5, 6, 0]
        assert weekday_order(6) == [6, 0, 1, 2, 3, 4, 5]

    def test_iter_days_inclusive_either_order(self):
        forward = list(iter_days(date(2024, 2, 27), date(2024, 3, 1)))
        backward = list(iter_days(date(2024, 3, 1), date(2024, 2, 27)))
        assert forward == [date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]
        assert backward == forward


class TestBuildMonthCells:
    """Tests for month grid generation."""

    def test_january_2024_monday_start(self):
        """Test Jan 2024 with Monday first: no leading blanks, 4 trailing."""
        cells = build_month_cells(date(2024, 1, 1), 1)
        assert len(cells) == 35
        assert cells[0] == date(2024, 1, 1)
        assert cells[30] == date(2024, 1, 31)
        assert cells[31:] == (None, None, None, None)

    def test_january_2024_sunday_start(self):
        cells = build_month_cells(date(2024, 1, 20), 0)
        assert cells[0] is None
        assert cells[1] == date(2024, 1, 1)
        assert len(cells) == 35

    def test_february_2015_fits_four_weeks(self):
        """Test a month starting on the first weekday with 28 days needs no padding."""
        cells = build_month_cells(date(2015, 2, 1), 0)
        assert len(cells) == 28
        assert None not in cells

    @pytest.mark.parametrize("first_day_of_week", range(7))
    def test_rows_and_alignment_hold_for_every_month(self, first_day_of_week):
        order = weekday_order(first_day_of_week)
        for year in (2023, 2024):
            for month in range(1, 13):
                first = date(year, month, 1)
                cells = build_month_cells(first, first_day_of_week)
                assert len(cells) % 7 == 0
                days = [c for c in cells if c is not None]
                assert [d.day for d in days] == list(range(1, days_in_month(first) + 1))
                for index, cell in enumerate(cells):
                    if cell is not None:
                        assert weekday_index(cell) == order[index % 7]

    def test_invalid_first_day_of_week(self):
        with pytest.raises(ValueError):
            build_month_cells(date(2024, 1, 1), 7)

    def test_build_month_grids_consecutive(self):
        grids = build_month_grids(date(2024, 12, 9), 0, 2)
        assert [g.month for g in grids] == [date(2024, 12, 1), date(2025, 1, 1)]
        for grid in grids:
            assert all(len(week) == 7 for week in grid.weeks)

    def test_month_grid_days_and_leading_blanks(self):
        grid = build_month_grids(date(2024, 2, 1), 0, 1)[0]
        assert grid.leading_blanks == 4
        assert len(grid.days) == 29


class TestBuildMonthRange:
    def test_spans_year_boundary(self):
        months = build_month_range(date(2023, 11, 20), date(2024, 2, 3))
        assert months == (date(2023, 11, 1), date(2023, 12, 1), date(2024, 1, 1), date(2024, 2, 1))

    def test_single_month(self):
        assert build_month_range(date(2024, 5, 2), date(2024, 5, 30)) == (date(2024, 5, 1),)

    def test_strictly_ascending(self):
        months = build_month_range(date(2020, 1, 1), date(2024, 12, 31))
        assert len(months) == 60
        assert all(a < b for a, b in zip(months, months[1:]))
