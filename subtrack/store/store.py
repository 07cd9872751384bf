"""
Subscription Store

The single owner of the tracked collection.

GUARANTEES:
- Insertion order is stable; edits replace a record in place
- Ids are assigned here and never change
- Every mutation is mirrored to the storage collaborator, synchronously,
  with the full collection
- The in-memory collection is the source of truth: if the collaborator
  fails, the mutation stands and PersistenceError is raised to the caller

The store is not thread-safe. It is meant to be owned by one caller
context (one UI session, one batch run).
"""

from typing import Iterator, Optional

from subtrack.audit import AuditLogger
from subtrack.errors import NotFoundError, PersistenceError, ValidationError
from subtrack.models.subscription import Subscription, SubscriptionDraft, generate_id
from subtrack.services.storage import SubscriptionStorageInterface
from subtrack.validation import DraftInput, SubscriptionValidator


class SubscriptionStore:
    """
    In-memory subscription collection with CRUD operations.

    Usage:
        store = SubscriptionStore(KeyValueSubscriptionStorage())
        sub_id = store.add({"name": "Netflix", "price": 999})
        store.update(sub_id, {"name": "Netflix", "price": 1099})
        store.remove(sub_id)
    """

    def __init__(
        self,
        storage: SubscriptionStorageInterface,
        validator: Optional[SubscriptionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Load the collection from storage.

        Args:
            storage: Persistence collaborator. load() is called exactly once, here.
            validator: Draft validator. A default one if None.
            audit_logger: Where mutations are recorded. A default one if None.

        Raises:
            PersistenceError: If the collaborator cannot load
        """
        self._storage = storage
        self._validator = validator or SubscriptionValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self._subscriptions: dict[str, Subscription] = {}

        try:
            loaded = storage.load()
        except PersistenceError as e:
            self._audit_logger.log_persistence_failed("load", str(e))
            raise
        except Exception as e:
            self._audit_logger.log_persistence_failed("load", str(e))
            raise PersistenceError(f"Failed to load subscriptions from {storage.name}: {e}") from e

        for sub in loaded:
            self._subscriptions[sub.id] = sub
        self._audit_logger.log_store_loaded(len(self._subscriptions), storage.name)

    @property
    def storage(self) -> SubscriptionStorageInterface:
        return self._storage

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __contains__(self, subscription_id: object) -> bool:
        return subscription_id in self._subscriptions

    def __iter__(self) -> Iterator[Subscription]:
        return iter(self.list())

    def list(self) -> list[Subscription]:
        """Snapshot of the collection in insertion order."""
        return list(self._subscriptions.values())

    def get(self, subscription_id: str) -> Subscription:
        """
        Look up one subscription.

        Raises:
            NotFoundError: If the id is unknown
        """
        try:
            return self._subscriptions[subscription_id]
        except KeyError:
            raise NotFoundError(subscription_id) from None

    def add(self, draft: DraftInput) -> str:
        """
        Add a new subscription.

        Args:
            draft: Submitted fields. Any `id` in it is ignored.

        Returns:
            The new subscription's id

        Raises:
            ValidationError: If name is empty or price is not a non-negative number
            PersistenceError: If storage failed (the subscription WAS added)
        """
        validated = self._validate(draft)

        subscription_id = generate_id()
        while subscription_id in self._subscriptions:
            subscription_id = generate_id()

        subscription = Subscription.from_draft(validated, subscription_id)
        self._subscriptions[subscription_id] = subscription
        self._audit_logger.log_subscription_added(
            subscription_id=subscription_id,
            name=subscription.name,
            collection_size=len(self._subscriptions),
        )

        self._persist(subscription_id)
        return subscription_id

    def update(self, subscription_id: str, draft: DraftInput) -> None:
        """
        Replace every field of a subscription except its id.

        The subscription keeps its position in the collection.

        Raises:
            ValidationError: If the draft is invalid
            NotFoundError: If the id is unknown
            PersistenceError: If storage failed (the edit WAS applied)
        """
        validated = self._validate(draft, subscription_id)
        current = self._require(subscription_id, "update")

        replacement = Subscription.from_draft(validated, subscription_id)
        changed_fields = [
            field
            for field in SubscriptionDraft.model_fields
            if getattr(current, field) != getattr(replacement, field)
        ]
        self._subscriptions[subscription_id] = replacement
        self._audit_logger.log_subscription_updated(subscription_id, changed_fields)

        self._persist(subscription_id)

    def remove(self, subscription_id: str) -> None:
        """
        Delete a subscription.

        Removing an unknown id is an error, not a no-op: it means the
        caller is holding a stale reference.

        Raises:
            NotFoundError: If the id is unknown
            PersistenceError: If storage failed (the subscription WAS removed)
        """
        removed = self._require(subscription_id, "remove")
        del self._subscriptions[subscription_id]
        self._audit_logger.log_subscription_removed(
            subscription_id=subscription_id,
            name=removed.name,
            collection_size=len(self._subscriptions),
        )

        self._persist(subscription_id)

    def _validate(
        self,
        draft: DraftInput,
        subscription_id: Optional[str] = None,
    ) -> SubscriptionDraft:
        try:
            return self._validator.validate(draft)
        except ValidationError as e:
            self._audit_logger.log_validation_failed(
                issues=[issue.model_dump() for issue in e.issues],
                subscription_id=subscription_id,
            )
            raise

    def _require(self, subscription_id: str, operation: str) -> Subscription:
        try:
            return self.get(subscription_id)
        except NotFoundError:
            self._audit_logger.log_not_found(subscription_id, operation)
            raise

    def _persist(self, subscription_id: str) -> None:
        """Mirror the full collection to storage. No retry, no rollback."""
        try:
            self._storage.save(self.list())
        except Exception as e:
            self._audit_logger.log_persistence_failed(
                operation="save",
                error_message=str(e),
                subscription_id=subscription_id,
            )
            if isinstance(e, PersistenceError):
                e.subscription_id = e.subscription_id or subscription_id
                raise
            raise PersistenceError(
                f"Failed to save subscriptions to {self._storage.name}: {e}",
                subscription_id=subscription_id,
            ) from e

