"""Subscription store package."""

from subtrack.store.store import SubscriptionStore

__all__ = ["SubscriptionStore"]
