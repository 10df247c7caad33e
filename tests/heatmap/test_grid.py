"""Tests for the ISO-weekday aligned year grid."""

import math
from dataclasses import replace
from datetime import date, timedelta

import pytest

from trainlog.heatmap.errors import GridInvariantError, InvalidYearError
from trainlog.heatmap.grid import DAYS_PER_WEEK, build_year_grid, verify_year_grid
from trainlog.utils.calendar import days_in_year, is_leap_year, iso_weekday, iso_weekday_from_sunday_first


class TestDaysInYear:
    def test_leap_and_common_years(self):
        assert days_in_year(2024) == 366
        assert days_in_year(2023) == 365

    @pytest.mark.parametrize(("year", "leap"), [(1900, False), (2000, True), (2100, False), (1600, True), (4, True)])
    def test_gregorian_century_rule(self, year, leap):
        assert is_leap_year(year) is leap
        assert days_in_year(year) == (366 if leap else 365)


def test_sunday_first_weekday_normalization():
    assert iso_weekday_from_sunday_first(0) == 6
    assert iso_weekday_from_sunday_first(1) == 0
    assert iso_weekday_from_sunday_first(6) == 5


class TestBuildYearGrid:
    def test_2023_starts_on_sunday(self):
        """Jan 1 2023 is a Sunday: six padding cells, then Jan 1 in the Sunday row."""
        grid = build_year_grid(2023)
        assert grid.iso_weekday_of_jan1 == 6
        assert grid.weeks[0] == (None, None, None, None, None, None, date(2023, 1, 1))
        assert len(grid) == 53

    def test_2024_starts_on_monday(self):
        grid = build_year_grid(2024)
        assert grid.iso_weekday_of_jan1 == 0
        assert grid.weeks[0][0] == date(2024, 1, 1)
        assert grid.weeks[-1][:2] == (date(2024, 12, 30), date(2024, 12, 31))
        assert grid.weeks[-1][2:] == (None,) * 5

    def test_leap_year_starting_sunday_needs_54_weeks(self):
        grid = build_year_grid(2012)
        assert len(grid) == 54
        assert grid.weeks[-1][0] == date(2012, 12, 31)

    def test_every_date_appears_once_in_its_weekday_row(self):
        grid = build_year_grid(2024)
        positions = {cell: (column, row) for column, row, cell in grid.cells()}
        day = date(2024, 1, 1)
        while day.year == 2024:
            column, row = positions[day]
            assert row == iso_weekday(day)
            assert grid.column_of(day) == column
            day += timedelta(days=1)
        assert len(positions) == 366

    def test_column_of_outside_year(self):
        assert build_year_grid(2024).column_of(date(2025, 1, 1)) is None

    def test_day_counts_for_every_representable_year(self):
        for year in range(1, 10000):
            grid = build_year_grid(year)
            non_null = sum(1 for week in grid.weeks for cell in week if cell is not None)
            assert non_null == days_in_year(year), year
            assert len(grid) == math.ceil((grid.iso_weekday_of_jan1 + days_in_year(year)) / 7), year
            assert all(len(week) == DAYS_PER_WEEK for week in grid.weeks), year

    def test_building_twice_is_identical(self):
        assert build_year_grid(2020) == build_year_grid(2020)

    @pytest.mark.parametrize("year", [0, -1, 10000, 2024.0, "2024", True, None])
    def test_invalid_years_fail_fast(self, year):
        with pytest.raises(InvalidYearError):
            build_year_grid(year)


class TestVerifyYearGrid:
    def test_detects_swapped_rows(self):
        grid = build_year_grid(2024)
        first = grid.weeks[0]
        swapped = (first[1], first[0]) + first[2:]
        broken = replace(grid, weeks=(swapped,) + grid.weeks[1:])
        with pytest.raises(GridInvariantError) as exc_info:
            verify_year_grid(broken)
        assert exc_info.value.code == "WEEKDAY_ROW_MISMATCH"

    def test_detects_missing_day(self):
        grid = build_year_grid(2024)
        first = grid.weeks[0]
        broken = replace(grid, weeks=((None,) + first[1:],) + grid.weeks[1:])
        with pytest.raises(GridInvariantError) as exc_info:
            verify_year_grid(broken)
        assert exc_info.value.code == "DAY_COUNT_MISMATCH"

    def test_detects_short_week(self):
        grid = build_year_grid(2024)
        broken = replace(grid, weeks=(grid.weeks[0][:6],) + grid.weeks[1:])
        with pytest.raises(GridInvariantError) as exc_info:
            verify_year_grid(broken)
        assert exc_info.value.code == "WEEK_LENGTH_MISMATCH"

    def test_detects_missing_week(self):
        grid = build_year_grid(2024)
        broken = replace(grid, weeks=grid.weeks[:-1])
        with pytest.raises(GridInvariantError) as exc_info:
            verify_year_grid(broken)
        assert exc_info.value.code == "WEEK_COUNT_MISMATCH"
