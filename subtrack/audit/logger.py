"""
Audit Logger

DESIGN DECISION: Every change to the collection is logged.
This provides:
1. Complete traceability of adds, edits and removals
2. Debugging capability when persistence fails

The audit logger:
- Is synchronous, like the rest of the core
- Keeps a bounded history of recent events for inspection
"""

from collections import deque
from typing import Optional

import structlog

from subtrack.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events to:
    1. Structured local log (structlog)
    2. An in-memory ring of recent events
    """

    def __init__(self, history_size: int = 100):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep. 0 keeps none.
        """
        self._history: deque[AuditEvent] = deque(maxlen=history_size)
        self._logger = structlog.get_logger("subtrack.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event locally and remember it."""
        self._history.append(event)

        log_dict = event.to_log_dict()
        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def get_recent_events(self, limit: Optional[int] = None) -> list[AuditEvent]:
        """Recent events, newest first."""
        events = list(reversed(self._history))
        return events if limit is None else events[:limit]

    def log_store_loaded(self, count: int, storage: str) -> None:
        self.log(AuditEventBuilder.store_loaded(count=count, storage=storage))

    def log_subscription_added(self, subscription_id: str, name: str, collection_size: int) -> None:
        """Log a new subscription."""
        self.log(AuditEventBuilder.subscription_added(
            subscription_id=subscription_id,
            name=name,
            collection_size=collection_size,
        ))

    def log_subscription_updated(self, subscription_id: str, changed_fields: list[str]) -> None:
        """Log an edit."""
        self.log(AuditEventBuilder.subscription_updated(
            subscription_id=subscription_id,
            changed_fields=changed_fields,
        ))

    def log_subscription_removed(self, subscription_id: str, name: str, collection_size: int) -> None:
        """Log a removal."""
        self.log(AuditEventBuilder.subscription_removed(
            subscription_id=subscription_id,
            name=name,
            collection_size=collection_size,
        ))

    def log_validation_failed(self, issues: list[dict], subscription_id: Optional[str] = None) -> None:
        self.log(AuditEventBuilder.validation_failed(
            issues=issues,
            subscription_id=subscription_id,
        ))

    def log_not_found(self, subscription_id: str, operation: str) -> None:
        self.log(AuditEventBuilder.subscription_not_found(
            subscription_id=subscription_id,
            operation=operation,
        ))

    def log_persistence_failed(
        self,
        operation: str,
        error_message: str,
        subscription_id: Optional[str] = None,
    ) -> None:
        """Log a storage collaborator failure."""
        self.log(AuditEventBuilder.persistence_failed(
            operation=operation,
            error_message=error_message,
            subscription_id=subscription_id,
        ))
