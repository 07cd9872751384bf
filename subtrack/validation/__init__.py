"""Draft validation package."""

from subtrack.validation.validator import DraftInput, SubscriptionValidator

__all__ = ["DraftInput", "SubscriptionValidator"]
