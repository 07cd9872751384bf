"""
Main Orchestrator for the Subscription Tracker

This module ties together all the components:
configuration -> storage collaborator -> store -> reports.

DESIGN DECISION: If the configured storage cannot be read at startup,
the application does not halt. It continues with an in-memory
collaborator (degraded, non-persisted mode) and says so loudly in the
log. The unreadable data is left untouched rather than overwritten.
"""

import logging
from typing import Optional

import structlog

from subtrack.audit import AuditLogger
from subtrack.config import AppSettings, Settings, StorageSettings, get_settings
from subtrack.errors import PersistenceError
from subtrack.reports import SubscriptionSummary, build_summary
from subtrack.recurrence.calculator import Reference
from subtrack.services.storage import (
    JsonFileSubscriptionStorage,
    KeyValueSubscriptionStorage,
    SubscriptionStorageInterface,
)
from subtrack.store import SubscriptionStore
from subtrack.validation import SubscriptionValidator


logger = structlog.get_logger(__name__)


class SubscriptionTracker:
    """
    The application facade a presentation layer talks to.

    Mutations go through `store`; per-render data comes from `summary()`.
    """

    def __init__(
        self,
        store: SubscriptionStore,
        app_settings: Optional[AppSettings] = None,
        degraded: bool = False,
    ):
        self.store = store
        self._app_settings = app_settings or AppSettings()
        self.degraded = degraded

    def summary(self, reference: Optional[Reference] = None) -> SubscriptionSummary:
        """Summary of the current collection, as of `reference` (default: now)."""
        return build_summary(
            self.store.list(),
            reference=reference,
            urgent_threshold_days=self._app_settings.urgent_threshold_days,
        )


def configure_logging(level: str) -> None:
    """Route structlog output through the standard library at `level`."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level), force=True)


def create_storage(settings: StorageSettings) -> SubscriptionStorageInterface:
    """Build the storage collaborator the settings ask for."""
    if settings.backend == "memory":
        return KeyValueSubscriptionStorage(key=settings.key)
    return JsonFileSubscriptionStorage(
        settings.data_path,
        write_attempts=settings.write_attempts,
    )


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[SubscriptionStorageInterface] = None,
) -> SubscriptionTracker:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use. get_settings() if None.
        storage: Storage collaborator override (e.g. for tests).
                 Built from settings if None.

    Returns:
        A ready SubscriptionTracker
    """
    settings = settings or get_settings()
    app_settings = settings.app
    configure_logging(app_settings.log_level)

    audit_logger = AuditLogger(history_size=app_settings.audit_history_size)
    validator = SubscriptionValidator(default_currency=app_settings.default_currency)
    storage = storage or create_storage(settings.storage)

    try:
        store = SubscriptionStore(storage, validator=validator, audit_logger=audit_logger)
        degraded = False
    except PersistenceError as e:
        logger.warning(
            "storage_unavailable_running_unpersisted",
            storage=storage.name,
            error=str(e),
        )
        store = SubscriptionStore(
            KeyValueSubscriptionStorage(),
            validator=validator,
            audit_logger=audit_logger,
        )
        degraded = True

    return SubscriptionTracker(store, app_settings=app_settings, degraded=degraded)
