"""Reporting package."""

from subtrack.reports.summary import (
    SubscriptionSummary,
    UpcomingPayment,
    build_summary,
)

__all__ = ["SubscriptionSummary", "UpcomingPayment", "build_summary"]
