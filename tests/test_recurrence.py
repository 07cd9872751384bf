"""Tests for next-occurrence and days-remaining calculations."""

import itertools
from datetime import date, datetime, timedelta, timezone

import pytest
from dateutil.relativedelta import relativedelta

from subtrack.models.subscription import BillingCycle
from subtrack.recurrence import (
    days_until,
    is_due_soon,
    iter_occurrences,
    next_occurrence,
)


class TestNextOccurrence:
    """Tests for next_occurrence."""

    def test_monthly_scenario(self):
        """Netflix billed on the 15th, checked on March 10th."""
        next_date = next_occurrence(date(2024, 1, 15), BillingCycle.MONTHLY, date(2024, 3, 10))
        assert next_date == date(2024, 3, 15)
        assert days_until(next_date, date(2024, 3, 10)) == 5

    def test_yearly(self):
        next_date = next_occurrence(date(2023, 6, 1), BillingCycle.YEARLY, date(2024, 3, 10))
        assert next_date == date(2024, 6, 1)

    def test_future_start_returns_start(self):
        """A subscription that hasn't started is next charged on its start date."""
        start = date(2024, 5, 1)
        assert next_occurrence(start, BillingCycle.MONTHLY, date(2024, 3, 10)) == start
        assert next_occurrence(start, BillingCycle.YEARLY, date(2024, 3, 10)) == start

    def test_occurrence_on_reference_day_is_skipped(self):
        """The next occurrence is strictly after the reference."""
        assert next_occurrence(
            date(2024, 3, 10), BillingCycle.MONTHLY, date(2024, 3, 10)
        ) == date(2024, 4, 10)

    def test_datetime_reference_later_the_same_day(self):
        """A payment at midnight today is already in the past by 9 a.m."""
        reference = datetime(2024, 3, 15, 9, 0)
        next_date = next_occurrence(date(2024, 1, 15), BillingCycle.MONTHLY, reference)
        assert next_date == date(2024, 4, 15)
        # 30 days and 15 hours, rounded up
        assert days_until(next_date, reference) == 31

    def test_timezone_aware_reference_uses_wall_clock(self):
        reference = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
        next_date = next_occurrence(date(2024, 1, 15), BillingCycle.MONTHLY, reference)
        assert next_date == date(2024, 3, 15)
        assert days_until(next_date, reference) == 5

    def test_defaults_to_now(self):
        today = date.today()
        assert next_occurrence(today, BillingCycle.MONTHLY) == today + relativedelta(months=1)
        assert next_occurrence(date(2999, 1, 1), BillingCycle.YEARLY) == date(2999, 1, 1)

    @pytest.mark.parametrize("reference, expected", [
        (date(2024, 2, 15), date(2024, 2, 29)),
        (date(2024, 3, 1), date(2024, 3, 31)),
        (date(2024, 4, 5), date(2024, 4, 30)),
        (date(2024, 5, 1), date(2024, 5, 31)),
        (date(2025, 2, 1), date(2025, 2, 28)),
    ])
    def test_month_end_clamps_without_drift(self, reference, expected):
        """Jan 31 clamps to the end of short months and returns to the 31st."""
        assert next_occurrence(date(2024, 1, 31), BillingCycle.MONTHLY, reference) == expected

    @pytest.mark.parametrize("reference, expected", [
        (date(2021, 1, 1), date(2021, 2, 28)),
        (date(2023, 3, 1), date(2024, 2, 29)),
    ])
    def test_leap_day_yearly(self, reference, expected):
        assert next_occurrence(date(2020, 2, 29), BillingCycle.YEARLY, reference) == expected

    @pytest.mark.parametrize("cycle", list(BillingCycle))
    def test_next_follows_previous_occurrence(self, cycle):
        """The result is the first occurrence after the reference; the one before it is not."""
        start = date(2023, 1, 31)
        for offset in range(0, 800, 17):
            reference = start + timedelta(days=offset)
            next_date = next_occurrence(start, cycle, reference)
            occurrences = list(itertools.takewhile(
                lambda d: d <= next_date, iter_occurrences(start, cycle)
            ))
            assert occurrences[-1] == next_date
            assert next_date > reference
            if len(occurrences) > 1:
                assert occurrences[-2] <= reference


class TestIterOccurrences:
    """Tests for iter_occurrences."""

    def test_starts_with_start_date(self):
        first = next(iter_occurrences(date(2024, 1, 15), BillingCycle.MONTHLY))
        assert first == date(2024, 1, 15)

    def test_monthly_sequence(self):
        occurrences = list(itertools.islice(
            iter_occurrences(date(2024, 1, 31), BillingCycle.MONTHLY), 4
        ))
        assert occurrences == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
            date(2024, 4, 30),
        ]

    def test_yearly_sequence(self):
        occurrences = list(itertools.islice(
            iter_occurrences(date(2023, 6, 1), BillingCycle.YEARLY), 3
        ))
        assert occurrences == [date(2023, 6, 1), date(2024, 6, 1), date(2025, 6, 1)]


class TestDaysUntil:
    """Tests for days_until."""

    def test_same_day_is_zero(self):
        assert days_until(date(2024, 3, 10), date(2024, 3, 10)) == 0

    def test_partial_day_rounds_up(self):
        assert days_until(date(2024, 3, 11), datetime(2024, 3, 10, 23, 59)) == 1

    def test_is_symmetric(self):
        """The absolute difference is used, so past targets count forward too."""
        assert days_until(date(2024, 3, 5), date(2024, 3, 10)) == 5

    def test_never_negative(self):
        assert days_until(date(2000, 1, 1), date(2024, 1, 1)) > 0


class TestIsDueSoon:
    """Tests for the urgency flag."""

    @pytest.mark.parametrize("days_left, expected", [
        (0, True),
        (3, True),
        (4, False),
        (30, False),
    ])
    def test_default_threshold(self, days_left, expected):
        assert is_due_soon(days_left, 3) is expected
