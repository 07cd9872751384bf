"""Services package."""

from subtrack.services.storage import (
    JsonFileSubscriptionStorage,
    KeyValueSubscriptionStorage,
    PersistenceError,
    SubscriptionStorageInterface,
)

__all__ = [
    # Storage services
    "JsonFileSubscriptionStorage",
    "KeyValueSubscriptionStorage",
    "PersistenceError",
    "SubscriptionStorageInterface",
]
