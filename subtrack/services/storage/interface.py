"""
Abstract Storage Interface

DESIGN DECISION: The store never talks to a storage medium directly.
It is handed a collaborator implementing this interface. This allows us to:
1. Keep the collection in a JSON file, a key-value mapping, or anything else
2. Use in-memory storage for testing
3. Keep business logic decoupled from storage implementation

The interface is intentionally tiny: the whole collection is loaded once
and saved whole after every change, like the original key-value store.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Sequence

import structlog
from pydantic import ValidationError as PydanticValidationError

from subtrack.errors import PersistenceError
from subtrack.models.subscription import Subscription


logger = structlog.get_logger(__name__)


class SubscriptionStorageInterface(ABC):
    """
    Abstract interface for subscription persistence.

    Any storage implementation must implement these methods.
    """

    @property
    def name(self) -> str:
        """Short human-readable name, used in logs."""
        return type(self).__name__

    @abstractmethod
    def load(self) -> list[Subscription]:
        """
        Load the stored collection.

        Returns:
            The stored subscriptions in their saved order,
            or an empty list if nothing has been stored yet

        Raises:
            PersistenceError: If stored data cannot be read
        """
        pass

    @abstractmethod
    def save(self, subscriptions: list[Subscription]) -> None:
        """
        Replace the stored collection.

        Args:
            subscriptions: The full current collection, in order

        Raises:
            PersistenceError: If the write fails
        """
        pass


def dump_subscriptions(
    subscriptions: list[Subscription],
    unreadable: Sequence[Any] = (),
) -> str:
    """
    Serialize a collection to the JSON wire format.

    `unreadable` records (as returned by read_records) are written back
    after the collection, unchanged.
    """
    records = [sub.to_record() for sub in subscriptions]
    records.extend(unreadable)
    return json.dumps(records, ensure_ascii=False)


def read_records(payload: str) -> tuple[list[Subscription], list[Any]]:
    """
    Parse the JSON wire format, keeping what could not be parsed.

    Malformed records are skipped with a warning so that one bad entry
    does not make the whole collection unreadable. They are returned
    untouched as the second element so a storage can write them back
    instead of erasing them on the next save. Records repeating an
    earlier id are dropped.

    Raises:
        PersistenceError: If the payload is not a JSON array
    """
    try:
        records = json.loads(payload)
    except json.JSONDecodeError as e:
        raise PersistenceError(f"Stored subscriptions are not valid JSON: {e}") from e

    if not isinstance(records, list):
        raise PersistenceError(
            f"Stored subscriptions must be a JSON array, got {type(records).__name__}"
        )

    subscriptions = []
    unreadable = []
    seen_ids = set()
    for index, record in enumerate(records):
        try:
            sub = Subscription.from_record(record)
        except PydanticValidationError as e:
            logger.warning(
                "skipped_malformed_record",
                index=index,
                error_count=e.error_count(),
            )
            unreadable.append(record)
            continue
        if sub.id in seen_ids:
            logger.warning("skipped_duplicate_record", index=index, subscription_id=sub.id)
            continue
        seen_ids.add(sub.id)
        subscriptions.append(sub)

    return subscriptions, unreadable


def parse_subscriptions(payload: str) -> list[Subscription]:
    """Parse the JSON wire format, dropping malformed and duplicate records."""
    subscriptions, _ = read_records(payload)
    return subscriptions
