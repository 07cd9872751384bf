"""
Data Models Package

This package contains all Pydantic models used in the subscription tracker.
All data flowing through the system must conform to these schemas.
"""

from subtrack.models.subscription import (
    COLORS,
    DEFAULT_CURRENCY,
    BillingCycle,
    Subscription,
    SubscriptionDraft,
    ValidationIssue,
    generate_id,
)
from subtrack.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Subscription models
    "COLORS",
    "DEFAULT_CURRENCY",
    "BillingCycle",
    "Subscription",
    "SubscriptionDraft",
    "ValidationIssue",
    "generate_id",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
