"""Recurrence calculation package."""

from subtrack.recurrence.calculator import (
    cycle_offset,
    days_until,
    is_due_soon,
    iter_occurrences,
    next_occurrence,
)

__all__ = [
    "cycle_offset",
    "days_until",
    "is_due_soon",
    "iter_occurrences",
    "next_occurrence",
]
