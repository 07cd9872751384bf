"""
Tests for the Subscription Tracker

Test strategy:
1. Unit tests for individual components (models, calculators, validators)
2. Store tests against in-memory and failing storage collaborators
3. No network, no files outside pytest's tmp_path
"""

import pytest
from datetime import date
from uuid import UUID

from subtrack.errors import NotFoundError, PersistenceError, ValidationError
from subtrack.models.subscription import (
    COLORS,
    BillingCycle,
    Subscription,
    SubscriptionDraft,
    ValidationIssue,
)
from subtrack.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestSubscriptionModels:
    """Tests for subscription Pydantic models."""

    def test_subscription_creation(self):
        """Test Subscription model creation."""
        sub = Subscription(
            name="Netflix",
            price=999,
            currency="₽",
            cycle=BillingCycle.MONTHLY,
            start_date=date(2024, 1, 15),
            color="bg-rose-500",
        )
        assert sub.name == "Netflix"
        assert sub.price == 999.0
        assert sub.cycle == BillingCycle.MONTHLY
        assert sub.start_date == date(2024, 1, 15)

    def test_subscription_strips_whitespace(self):
        """Test that whitespace is stripped from the name."""
        sub = Subscription(name="  Spotify  ", price=169)
        assert sub.name == "Spotify"

    def test_subscription_rejects_negative_price(self):
        """Test that negative prices are rejected."""
        with pytest.raises(ValueError):
            Subscription(name="Test", price=-1)

    def test_subscription_rejects_empty_name(self):
        """Test that an empty name is rejected."""
        with pytest.raises(ValueError):
            Subscription(name="   ", price=10)

    def test_subscription_accepts_zero_price(self):
        """Test that free subscriptions are allowed."""
        sub = Subscription(name="Free tier", price=0)
        assert sub.price == 0.0

    def test_subscription_ids_are_unique(self):
        """Test that generated ids differ and are opaque strings."""
        first = Subscription(name="A", price=1)
        second = Subscription(name="B", price=1)
        assert first.id != second.id
        assert isinstance(first.id, str)
        UUID(hex=first.id)

    def test_defaults(self):
        """Test default currency, cycle, start date and color."""
        sub = Subscription(name="Test", price=1)
        assert sub.currency == "₽"
        assert sub.cycle == BillingCycle.MONTHLY
        assert sub.start_date == date.today()
        assert sub.color in COLORS

    def test_future_start_date_is_valid(self):
        """Test that a subscription may start in the future."""
        sub = Subscription(name="Later", price=5, start_date=date(2999, 1, 1))
        assert sub.start_date == date(2999, 1, 1)

    def test_start_date_alias(self):
        """Test that the wire name startDate is accepted."""
        sub = Subscription(name="Test", price=1, startDate="2024-02-29")
        assert sub.start_date == date(2024, 2, 29)

    def test_to_record_wire_format(self):
        """Test conversion to a storage record."""
        sub = Subscription(
            id="abc123",
            name="Netflix",
            price=999,
            currency="₽",
            cycle=BillingCycle.YEARLY,
            start_date=date(2024, 1, 15),
            color="bg-blue-500",
        )
        record = sub.to_record()
        assert list(record) == ["id", "name", "price", "currency", "cycle", "startDate", "color"]
        assert record == {
            "id": "abc123",
            "name": "Netflix",
            "price": 999.0,
            "currency": "₽",
            "cycle": "yearly",
            "startDate": "2024-01-15",
            "color": "bg-blue-500",
        }

    def test_from_record(self):
        """Test parsing a record written by the original application."""
        sub = Subscription.from_record({
            "id": "k3j4h5g6f",
            "name": "Spotify",
            "price": 169,
            "currency": "₽",
            "cycle": "monthly",
            "startDate": "2023-05-10",
            "color": "bg-emerald-500",
        })
        assert sub.id == "k3j4h5g6f"
        assert sub.cycle == BillingCycle.MONTHLY
        assert sub.start_date == date(2023, 5, 10)

    def test_draft_round_trip(self):
        """Test that to_draft/from_draft keep every field and the id."""
        sub = Subscription(name="Test", price=12.5, cycle=BillingCycle.YEARLY)
        rebuilt = Subscription.from_draft(sub.to_draft(), sub.id)
        assert rebuilt == sub

    def test_subscription_is_frozen(self):
        """Test that a subscription cannot be changed in place."""
        sub = Subscription(name="Test", price=1)
        with pytest.raises(ValueError):
            sub.price = -5
        assert sub.price == 1.0

    def test_draft_has_no_id(self):
        """Test that drafts carry no identifier."""
        draft = SubscriptionDraft(name="Test", price=1)
        assert not hasattr(draft, "id")


class TestBillingCycle:
    """Tests for the billing cycle enum."""

    def test_cycle_values(self):
        """Test the literal wire values."""
        assert BillingCycle.MONTHLY.value == "monthly"
        assert BillingCycle.YEARLY.value == "yearly"

    def test_cycle_from_string(self):
        assert BillingCycle("yearly") is BillingCycle.YEARLY

    def test_unknown_cycle_rejected(self):
        with pytest.raises(ValueError):
            BillingCycle("weekly")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_ADDED,
            description="Subscription added",
        )
        assert event.event_type == AuditEventType.SUBSCRIPTION_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_REMOVED,
            subscription_id="abc",
            description="Subscription removed",
            details={"name": "Netflix"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "subscription_removed"
        assert log_dict["subscription_id"] == "abc"
        assert log_dict["details"]["name"] == "Netflix"

    def test_audit_event_builder_subscription_added(self):
        """Test AuditEventBuilder.subscription_added."""
        event = AuditEventBuilder.subscription_added(
            subscription_id="abc",
            name="Netflix",
            collection_size=3,
        )
        assert event.event_type == AuditEventType.SUBSCRIPTION_ADDED
        assert event.subscription_id == "abc"
        assert event.details["collection_size"] == 3

    def test_audit_event_builder_persistence_failed(self):
        """Test AuditEventBuilder.persistence_failed."""
        event = AuditEventBuilder.persistence_failed(
            operation="save",
            error_message="disk full",
        )
        assert event.event_type == AuditEventType.PERSISTENCE_FAILED
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"


class TestErrors:
    """Tests for the error taxonomy."""

    def test_validation_error_lists_fields(self):
        error = ValidationError([
            ValidationIssue(field="name", issue_type="empty", message="Name is required"),
            ValidationIssue(field="price", issue_type="negative", message="Price cannot be negative"),
        ])
        assert error.fields == ["name", "price"]
        assert isinstance(error, ValueError)
        assert "name: Name is required" in str(error)

    def test_not_found_error(self):
        error = NotFoundError("missing-id")
        assert isinstance(error, KeyError)
        assert error.subscription_id == "missing-id"
        assert str(error) == "Subscription not found: missing-id"

    def test_persistence_error_carries_subscription_id(self):
        error = PersistenceError("write failed", subscription_id="abc")
        assert error.subscription_id == "abc"
        assert str(error) == "write failed"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
