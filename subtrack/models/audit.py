"""
Audit Models for the Subscription Tracker

Every change to the tracked collection is recorded as an audit event.
This provides:
1. Traceability of all mutations
2. Debugging information when persistence fails

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Collection lifecycle
    STORE_LOADED = "store_loaded"

    # Mutations
    SUBSCRIPTION_ADDED = "subscription_added"
    SUBSCRIPTION_UPDATED = "subscription_updated"
    SUBSCRIPTION_REMOVED = "subscription_removed"

    # Rejected requests
    VALIDATION_FAILED = "validation_failed"
    SUBSCRIPTION_NOT_FOUND = "subscription_not_found"

    # Persistence
    PERSISTENCE_FAILED = "persistence_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    subscription_id: Optional[str] = Field(
        default=None,
        description="Subscription this event relates to, if any"
    )
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "subscription_id": self.subscription_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.subscription_added(subscription_id, name, size)
        event = AuditEventBuilder.persistence_failed("save", str(exc))
    """

    @staticmethod
    def store_loaded(count: int, storage: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            description=f"Loaded {count} subscriptions from {storage}",
            details={
                "count": count,
                "storage": storage,
            },
        )

    @staticmethod
    def subscription_added(subscription_id: str, name: str, collection_size: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_ADDED,
            subscription_id=subscription_id,
            description=f"Subscription added: {name}",
            details={
                "name": name,
                "collection_size": collection_size,
            },
        )

    @staticmethod
    def subscription_updated(subscription_id: str, changed_fields: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_UPDATED,
            subscription_id=subscription_id,
            description=f"Subscription updated ({len(changed_fields)} fields changed)",
            details={
                "changed_fields": changed_fields,
            },
        )

    @staticmethod
    def subscription_removed(subscription_id: str, name: str, collection_size: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_REMOVED,
            subscription_id=subscription_id,
            description=f"Subscription removed: {name}",
            details={
                "name": name,
                "collection_size": collection_size,
            },
        )

    @staticmethod
    def validation_failed(issues: list[dict], subscription_id: Optional[str] = None) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            subscription_id=subscription_id,
            description=f"Validation failed with {len(issues)} issues",
            details={
                "issues": issues,
            },
        )

    @staticmethod
    def subscription_not_found(subscription_id: str, operation: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            subscription_id=subscription_id,
            description=f"{operation.capitalize()} requested for unknown subscription",
            details={
                "operation": operation,
            },
        )

    @staticmethod
    def persistence_failed(
        operation: str,
        error_message: str,
        subscription_id: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSISTENCE_FAILED,
            severity=AuditSeverity.ERROR,
            subscription_id=subscription_id,
            description=f"Persistence {operation} failed",
            error_message=error_message,
            details={
                "operation": operation,
            },
        )
