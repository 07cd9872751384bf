"""
Aggregation Engine

Normalizes subscription prices to a monthly rate and sums them.

IMPORTANT: Currencies are never converted. A grand total is only
meaningful when every subscription shares one currency; use
totals_by_currency() when they do not.
"""

from typing import Iterable

from pydantic import BaseModel, Field

from subtrack.models.subscription import BillingCycle, Subscription

MONTHS_PER_YEAR = 12


class CurrencyTotals(BaseModel):
    """Monthly and yearly totals for one currency tag."""

    currency: str
    subscription_count: int = Field(ge=0)
    total_monthly: float = Field(ge=0)
    total_yearly: float = Field(ge=0)


def monthly_equivalent(subscription: Subscription) -> float:
    """
    Price normalized to a monthly rate.

    Not a prediction of actual monthly spend. No rounding is applied.
    """
    if subscription.cycle == BillingCycle.YEARLY:
        return subscription.price / MONTHS_PER_YEAR
    return subscription.price


def total_monthly(subscriptions: Iterable[Subscription]) -> float:
    """Sum of monthly equivalents, regardless of currency."""
    return sum((monthly_equivalent(sub) for sub in subscriptions), 0.0)


def total_yearly(subscriptions: Iterable[Subscription]) -> float:
    """
    Yearly total.

    Derived from total_monthly so that yearly == 12 * monthly exactly.
    """
    return total_monthly(subscriptions) * MONTHS_PER_YEAR


def totals_by_currency(subscriptions: Iterable[Subscription]) -> dict[str, CurrencyTotals]:
    """Totals grouped by currency tag, in first-seen order."""
    by_currency: dict[str, list[Subscription]] = {}
    for sub in subscriptions:
        by_currency.setdefault(sub.currency, []).append(sub)

    return {
        currency: CurrencyTotals(
            currency=currency,
            subscription_count=len(subs),
            total_monthly=total_monthly(subs),
            total_yearly=total_yearly(subs),
        )
        for currency, subs in by_currency.items()
    }
