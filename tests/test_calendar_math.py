"""Tests for epic_timelines.core.calendar_math: month lengths and clamping."""

from datetime import datetime, timezone

import pytest

from epic_timelines.core.calendar_math import (
    add_months_clamped,
    add_years_clamped,
    last_day_of_month,
)


class TestLastDayOfMonth:
    @pytest.mark.parametrize("month, days", [
        (0, 31), (1, 28), (2, 31), (3, 30), (4, 31), (5, 30),
        (6, 31), (7, 31), (8, 30), (9, 31), (10, 30), (11, 31),
    ])
    def test_common_year(self, month, days):
        assert last_day_of_month(2025, month) == days

    def test_leap_year_divisible_by_4(self):
        assert last_day_of_month(2024, 1) == 29

    def test_century_is_not_leap(self):
        assert last_day_of_month(1900, 1) == 28

    def test_every_400_years_is_leap(self):
        assert last_day_of_month(2000, 1) == 29

    def test_month_out_of_range(self):
        with pytest.raises(ValueError):
            last_day_of_month(2025, 12)


class TestAddMonthsClamped:
    def test_plain_step(self):
        assert add_months_clamped(datetime(2025, 11, 7), 1, 7) == datetime(2025, 12, 7)

    def test_crosses_year(self):
        assert add_months_clamped(datetime(2025, 12, 7), 1, 7) == datetime(2026, 1, 7)

    def test_clamps_to_short_month(self):
        assert add_months_clamped(datetime(2025, 8, 31), 1, 31) == datetime(2025, 9, 30)

    def test_reanchors_after_short_month(self):
        assert add_months_clamped(datetime(2025, 9, 30), 1, 31) == datetime(2025, 10, 31)

    def test_clamps_to_leap_february(self):
        assert add_months_clamped(datetime(2023, 12, 31), 2, 31) == datetime(2024, 2, 29)

    def test_keeps_time_and_tzinfo(self):
        start = datetime(2025, 1, 31, 9, 30, tzinfo=timezone.utc)
        assert add_months_clamped(start, 1, 31) == datetime(2025, 2, 28, 9, 30, tzinfo=timezone.utc)


class TestAddYearsClamped:
    def test_leap_day_clamps_in_common_year(self):
        assert add_years_clamped(datetime(2024, 2, 29), 1, 29) == datetime(2025, 2, 28)

    def test_leap_day_restored_in_leap_year(self):
        assert add_years_clamped(datetime(2027, 2, 28), 1, 29) == datetime(2028, 2, 29)
