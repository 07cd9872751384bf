"""
Subscription Summary Report

DESIGN DECISION: Everything a list view needs per render is computed
here, in one pass, from a snapshot of the store:
- next payment date and days left for each subscription
- whether that payment is urgent
- monthly and yearly totals, overall and per currency

The presentation layer only formats what this returns.
"""

from datetime import date, datetime
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from subtrack.aggregation import (
    CurrencyTotals,
    monthly_equivalent,
    total_monthly,
    total_yearly,
    totals_by_currency,
)
from subtrack.models.subscription import Subscription
from subtrack.recurrence import days_until, is_due_soon, next_occurrence
from subtrack.recurrence.calculator import Reference

DEFAULT_URGENT_THRESHOLD_DAYS = 3


class UpcomingPayment(BaseModel):
    """The next payment of one subscription."""

    subscription: Subscription
    next_date: date = Field(
        ...,
        description="Next billing date strictly after the reference"
    )
    days_left: int = Field(
        ...,
        ge=0,
        description="Whole days until next_date, rounded up"
    )
    is_urgent: bool = Field(
        ...,
        description="Due within the urgency threshold"
    )
    monthly_equivalent: float = Field(ge=0)


class SubscriptionSummary(BaseModel):
    """
    Snapshot report over a collection.

    `payments` is in collection order.
    """

    total_monthly: float = Field(ge=0)
    total_yearly: float = Field(ge=0)
    by_currency: dict[str, CurrencyTotals] = Field(default_factory=dict)
    payments: list[UpcomingPayment] = Field(default_factory=list)

    @property
    def subscription_count(self) -> int:
        return len(self.payments)

    @property
    def urgent_count(self) -> int:
        return sum(1 for payment in self.payments if payment.is_urgent)

    def due_within(self, days: int) -> list[UpcomingPayment]:
        """Payments due within `days` days, soonest first."""
        return [p for p in self.sorted_by_next_date() if p.days_left <= days]

    def sorted_by_next_date(self) -> list[UpcomingPayment]:
        """Payments ordered by next date; ties keep collection order."""
        return sorted(self.payments, key=lambda p: p.next_date)


def build_summary(
    subscriptions: Iterable[Subscription],
    reference: Optional[Reference] = None,
    urgent_threshold_days: int = DEFAULT_URGENT_THRESHOLD_DAYS,
) -> SubscriptionSummary:
    """
    Build a summary report.

    Args:
        subscriptions: Usually store.list()
        reference: "Now". Defaults to the current moment, captured once
                   so every row is computed against the same instant.
        urgent_threshold_days: Payments due in this many days or fewer are urgent

    Returns:
        SubscriptionSummary
    """
    subs = list(subscriptions)
    now = reference if reference is not None else datetime.now()

    payments = []
    for sub in subs:
        next_date = next_occurrence(sub.start_date, sub.cycle, now)
        days_left = days_until(next_date, now)
        payments.append(UpcomingPayment(
            subscription=sub,
            next_date=next_date,
            days_left=days_left,
            is_urgent=is_due_soon(days_left, urgent_threshold_days),
            monthly_equivalent=monthly_equivalent(sub),
        ))

    return SubscriptionSummary(
        total_monthly=total_monthly(subs),
        total_yearly=total_yearly(subs),
        by_currency=totals_by_currency(subs),
        payments=payments,
    )