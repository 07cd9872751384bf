"""
Storage Services Package

Provides the abstract persistence interface and concrete implementations.
Storage is a collaborator of the store, so it is designed to be swappable.
"""

from subtrack.errors import PersistenceError
from subtrack.services.storage.interface import (
    SubscriptionStorageInterface,
    dump_subscriptions,
    parse_subscriptions,
    read_records,
)
from subtrack.services.storage.json_file import JsonFileSubscriptionStorage
from subtrack.services.storage.key_value import KeyValueSubscriptionStorage

__all__ = [
    # Interface
    "SubscriptionStorageInterface",
    "dump_subscriptions",
    "parse_subscriptions",
    "read_records",
    # Exceptions
    "PersistenceError",
    # Implementations
    "JsonFileSubscriptionStorage",
    "KeyValueSubscriptionStorage",
]
