"""
Core Data Models for the Subscription Tracker

These models define the schema for every subscription the tracker holds.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Serialize to the storage wire format without extra glue

DESIGN DECISION: The wire format uses the field names of the original
key-value store (camelCase `startDate`), while Python code uses snake_case.
Pydantic aliases bridge the two.
"""

import random
from datetime import date
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


# Palette offered by the original colour picker
COLORS = [
    "bg-blue-500",
    "bg-purple-500",
    "bg-emerald-500",
    "bg-rose-500",
    "bg-orange-500",
    "bg-pink-500",
    "bg-indigo-500",
    "bg-gray-600",
]

DEFAULT_CURRENCY = "₽"


def generate_id() -> str:
    """Return a fresh, collision-resistant subscription identifier."""
    return uuid4().hex


def random_color() -> str:
    return random.choice(COLORS)


class BillingCycle(str, Enum):
    """
    How often a subscription is charged.

    The string values are the literal values stored on the wire.
    """
    MONTHLY = "monthly"
    YEARLY = "yearly"


class SubscriptionDraft(BaseModel):
    """
    The editable part of a subscription.

    This is what the presentation layer submits on "add" and "edit".
    Everything except the identifier lives here.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Display label"
    )
    price: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Price per cycle, in the subscription's own currency"
    )
    currency: str = Field(
        default=DEFAULT_CURRENCY,
        min_length=1,
        max_length=10,
        description="Currency symbol or tag (never converted)"
    )
    cycle: BillingCycle = Field(
        default=BillingCycle.MONTHLY,
        description="Billing cycle"
    )
    start_date: date = Field(
        default_factory=date.today,
        alias="startDate",
        description="Date of the first payment"
    )
    color: str = Field(
        default_factory=random_color,
        description="Presentation tag, ignored by calculations"
    )


class Subscription(SubscriptionDraft):
    """
    A tracked subscription.

    CRITICAL: The `id` is assigned by the store at creation and never
    changes. Edits replace every other field wholesale.

    Instances are frozen: the store hands them out directly, and the only
    way to change one is store.update().
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=generate_id,
        min_length=1,
        description="Opaque unique identifier"
    )

    @classmethod
    def from_draft(cls, draft: SubscriptionDraft, subscription_id: str) -> "Subscription":
        """Build a subscription from a validated draft."""
        return cls(id=subscription_id, **draft.model_dump())

    def to_draft(self) -> SubscriptionDraft:
        return SubscriptionDraft(**self.model_dump(exclude={"id"}))

    def to_record(self) -> dict[str, Any]:
        """
        Convert to a storage record.

        Returns keys in wire order:
        {id, name, price, currency, cycle, startDate, color}
        """
        data = self.model_dump(mode="json", by_alias=True)
        return {
            "id": data["id"],
            "name": data["name"],
            "price": data["price"],
            "currency": data["currency"],
            "cycle": data["cycle"],
            "startDate": data["startDate"],
            "color": data["color"],
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Subscription":
        """Parse a storage record. Raises pydantic.ValidationError if malformed."""
        return cls.model_validate(record)


class ValidationIssue(BaseModel):
    """A single problem found in a submitted draft."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'negative', 'not_a_number')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
