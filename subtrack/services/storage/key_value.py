"""
Key-Value Storage Implementation

Keeps the serialized collection under a single key of any string mapping,
exactly like the original browser storage did
(`getItem('subscriptions')` / `setItem('subscriptions', json)`).

A plain dict gives an in-memory store, which is what tests and the
degraded (non-persisted) mode use. Any MutableMapping[str, str] works,
for example a `shelve` or `dbm` database.
"""

from typing import MutableMapping, Optional

from subtrack.errors import PersistenceError
from subtrack.models.subscription import Subscription
from subtrack.services.storage.interface import (
    SubscriptionStorageInterface,
    dump_subscriptions,
    read_records,
)


DEFAULT_KEY = "subscriptions"


class KeyValueSubscriptionStorage(SubscriptionStorageInterface):
    """Subscription storage backed by one key of a string mapping."""

    def __init__(
        self,
        backend: Optional[MutableMapping[str, str]] = None,
        key: str = DEFAULT_KEY,
    ):
        """
        Args:
            backend: The mapping to store into. A fresh dict if None.
            key: Key the serialized collection is stored under.
        """
        self._backend = backend if backend is not None else {}
        self._key = key
        # Stored records that failed to parse, written back on save
        self._unreadable: list = []

    @property
    def name(self) -> str:
        return f"key-value store ({self._key})"

    @property
    def backend(self) -> MutableMapping[str, str]:
        return self._backend

    def load(self) -> list[Subscription]:
        try:
            payload = self._backend.get(self._key)
        except Exception as e:
            raise PersistenceError(f"Failed to read key '{self._key}': {e}") from e

        if not payload:
            return []
        subscriptions, self._unreadable = read_records(payload)
        return subscriptions

    def save(self, subscriptions: list[Subscription]) -> None:
        payload = dump_subscriptions(subscriptions, self._unreadable)
        try:
            self._backend[self._key] = payload
        except Exception as e:
            raise PersistenceError(f"Failed to write key '{self._key}': {e}") from e
