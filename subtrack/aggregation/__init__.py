"""Cost aggregation package."""

from subtrack.aggregation.engine import (
    MONTHS_PER_YEAR,
    CurrencyTotals,
    monthly_equivalent,
    total_monthly,
    total_yearly,
    totals_by_currency,
)

__all__ = [
    "MONTHS_PER_YEAR",
    "CurrencyTotals",
    "monthly_equivalent",
    "total_monthly",
    "total_yearly",
    "totals_by_currency",
]
