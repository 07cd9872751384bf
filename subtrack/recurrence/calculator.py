"""
Recurrence Calculator

Computes when a subscription is next charged and how many days remain.

ROLLOVER RULE: Occurrence n is always computed from the start date
(start + n months, or start + n years) with python-dateutil's
relativedelta. When the target month is shorter than the start day,
the date clamps to the month's last day:

    Jan 31 -> Feb 29 (leap) -> Mar 31 -> Apr 30 -> ...
    Feb 29 (yearly) -> Feb 28 in common years -> Feb 29 in leap years

Because every occurrence is anchored to the start date, a short month
never shifts the billing day for the months that follow. The price is
that consecutive occurrences are not always one relativedelta step
apart: Feb 29 + 1 month is Mar 29, but the occurrence after a Jan 31
start's Feb 29 is Mar 31.

All functions are pure. Naive local time is assumed throughout.
"""

import math
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional, Union

from dateutil.relativedelta import relativedelta

from subtrack.models.subscription import BillingCycle

Reference = Union[date, datetime]

ONE_DAY = timedelta(days=1)


def _as_instant(value: Optional[Reference]) -> datetime:
    """Normalize a reference to a naive datetime (a bare date means midnight)."""
    if value is None:
        return datetime.now()
    if isinstance(value, datetime):
        # Wall-clock time only; no timezone-aware scheduling
        return value.replace(tzinfo=None)
    return datetime.combine(value, time.min)


def cycle_offset(cycle: BillingCycle, count: int) -> relativedelta:
    """The offset of `count` whole cycles."""
    if cycle == BillingCycle.MONTHLY:
        return relativedelta(months=count)
    return relativedelta(years=count)


def iter_occurrences(start_date: date, cycle: BillingCycle) -> Iterator[date]:
    """
    Yield every billing date of a subscription, starting with start_date.

    The generator is infinite; callers stop it.
    """
    count = 0
    while True:
        yield start_date + cycle_offset(cycle, count)
        count += 1


def next_occurrence(
    start_date: date,
    cycle: BillingCycle,
    reference: Optional[Reference] = None,
) -> date:
    """
    First billing date strictly after the reference instant.

    A subscription that has not started yet is next charged on its
    start date.

    Args:
        start_date: Date of the first payment
        cycle: Billing cycle
        reference: "Now". Defaults to the current moment.

    Returns:
        The next billing date
    """
    now = _as_instant(reference)
    return next(
        occurrence
        for occurrence in iter_occurrences(start_date, cycle)
        if datetime.combine(occurrence, time.min) > now
    )


def days_until(target_date: date, reference: Optional[Reference] = None) -> int:
    """
    Whole days between the reference instant and a target date, rounded up.

    The difference is absolute, so callers should pass a target at or
    after the reference (as next_occurrence guarantees). Zero means the
    payment is due today.
    """
    now = _as_instant(reference)
    target = datetime.combine(target_date, time.min)
    return math.ceil(abs(target - now) / ONE_DAY)


def is_due_soon(days_left: int, threshold: int) -> bool:
    """Whether a payment `days_left` away should be flagged as urgent."""
    return days_left <= threshold
