"""
Error taxonomy for the subscription tracker.

- ValidationError: a submitted draft is unusable. Callers re-prompt.
- NotFoundError: an id does not exist in the collection (stale reference).
- PersistenceError: the storage collaborator failed. The in-memory
  collection is still valid; the application keeps running unpersisted.
"""

from typing import Optional

from subtrack.models.subscription import ValidationIssue


class SubtrackError(Exception):
    """Base exception for the subscription tracker."""
    pass


class ValidationError(SubtrackError, ValueError):
    """A draft failed validation. Carries every issue found."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        summary = "; ".join(f"{issue.field}: {issue.message}" for issue in issues)
        super().__init__(f"Invalid subscription: {summary}")

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]


class NotFoundError(SubtrackError, KeyError):
    """Subscription id not present in the collection."""

    def __init__(self, subscription_id: str):
        self.subscription_id = subscription_id
        super().__init__(subscription_id)

    def __str__(self) -> str:
        return f"Subscription not found: {self.subscription_id}"


class PersistenceError(SubtrackError):
    """
    The storage collaborator failed to load or save.

    When raised from a mutation, the mutation has already been applied
    in memory. `subscription_id` names the affected record, if any.
    """

    def __init__(self, message: str, subscription_id: Optional[str] = None):
        self.subscription_id = subscription_id
        super().__init__(message)
