"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON file is used as the default backend because:
1. The collection is small (one user's subscriptions)
2. Users can read and back up the file directly
3. No database setup required

TRADEOFFS:
- The whole file is rewritten on every change (fine at this size)
- Writes go to a temporary file that atomically replaces the target,
  so a crash mid-write never leaves a truncated collection behind

Transient write failures are retried here, inside the collaborator.
The store itself never retries.
"""

import os
import tempfile
from pathlib import Path
from typing import Union

import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from subtrack.errors import PersistenceError
from subtrack.models.subscription import Subscription
from subtrack.services.storage.interface import (
    SubscriptionStorageInterface,
    dump_subscriptions,
    read_records,
)


logger = structlog.get_logger(__name__)


class JsonFileSubscriptionStorage(SubscriptionStorageInterface):
    """
    JSON file implementation of subscription storage.

    The file holds one JSON array of subscription records.
    """

    def __init__(
        self,
        path: Union[str, Path],
        write_attempts: int = 3,
        retry_wait_max: float = 2.0,
    ):
        """
        Args:
            path: File to read and write
            write_attempts: Attempts per save before giving up
            retry_wait_max: Upper bound (seconds) of the backoff between attempts
        """
        self._path = Path(path)
        self._write_attempts = write_attempts
        self._retry_wait_max = retry_wait_max
        # Stored records that failed to parse, written back on save
        self._unreadable: list = []

    @property
    def name(self) -> str:
        return f"JSON file {self._path}"

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Subscription]:
        """Load the collection. A missing or empty file means no subscriptions."""
        if not self._path.exists():
            return []

        try:
            payload = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read {self._path}: {e}") from e

        if not payload.strip():
            return []
        subscriptions, self._unreadable = read_records(payload)
        return subscriptions

    def save(self, subscriptions: list[Subscription]) -> None:
        """Rewrite the file with the full collection."""
        payload = dump_subscriptions(subscriptions, self._unreadable)
        retrying = Retrying(
            stop=stop_after_attempt(self._write_attempts),
            wait=wait_exponential(multiplier=0.1, max=self._retry_wait_max),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    self._write(payload)
        except OSError as e:
            raise PersistenceError(f"Failed to write {self._path}: {e}") from e

    def _write(self, payload: str) -> None:
        """Write to a temporary sibling, then atomically replace the target."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=self._path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path)
        except OSError:
            logger.warning("subscription_file_write_failed", path=str(self._path))
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
