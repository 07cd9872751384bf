"""
Draft Validation

DESIGN DECISION: Every add/edit request goes through one validator
before it touches the collection. It accepts either a SubscriptionDraft
or the raw mapping a form would submit, and reports EVERY problem at
once so the caller can re-prompt for all of them.

IMPORTANT: Validation never silently fixes issues. A price of "abc" is
rejected, not treated as zero.
"""

import math
from decimal import Decimal
from numbers import Real
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from subtrack.errors import ValidationError
from subtrack.models.subscription import SubscriptionDraft, ValidationIssue


DraftInput = Union[SubscriptionDraft, Mapping[str, Any]]

# Field names pydantic reports, mapped to the names callers submit
_FIELD_NAMES = {"start_date": "startDate"}


def _field_name(loc: tuple) -> str:
    if not loc:
        return "draft"
    name = str(loc[0])
    return _FIELD_NAMES.get(name, name)


class SubscriptionValidator:
    """
    Validates subscription drafts.

    Stage 1: Checks the two required fields (name, price) explicitly,
    with messages a form can show.
    Stage 2: Schema validation of the remaining fields by pydantic.
    """

    def __init__(self, default_currency: Optional[str] = None):
        """
        Args:
            default_currency: Currency applied when a mapping omits one.
                              The model default is used if None.
        """
        self._default_currency = default_currency

    def _check_name(self, value: Any) -> Optional[ValidationIssue]:
        if value is None:
            return ValidationIssue(
                field="name",
                issue_type="missing",
                message="Name is required",
            )
        if not isinstance(value, str) or not value.strip():
            return ValidationIssue(
                field="name",
                issue_type="empty",
                message="Name must be a non-empty string",
            )
        return None

    def _check_price(self, value: Any) -> tuple[Optional[float], Optional[ValidationIssue]]:
        """Return (price as float, None) or (None, issue)."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return None, ValidationIssue(
                field="price",
                issue_type="missing",
                message="Price is required",
            )

        # bool is a Real subclass, but True is not a price
        number = None
        if isinstance(value, (Real, Decimal, str)) and not isinstance(value, bool):
            try:
                number = float(value.strip() if isinstance(value, str) else value)
            except (OverflowError, ValueError):
                number = None

        if number is None or not math.isfinite(number):
            return None, ValidationIssue(
                field="price",
                issue_type="not_a_number",
                message=f"Price must be a number, got {value!r}",
            )
        if number < 0:
            return None, ValidationIssue(
                field="price",
                issue_type="negative",
                message="Price cannot be negative",
            )
        return number, None

    def validate(self, draft: DraftInput) -> SubscriptionDraft:
        """
        Validate a draft.

        Args:
            draft: A SubscriptionDraft, or a mapping of submitted field values

        Returns:
            A validated SubscriptionDraft

        Raises:
            ValidationError: With every issue found
        """
        if isinstance(draft, SubscriptionDraft):
            data = draft.model_dump(by_alias=True)
        elif isinstance(draft, Mapping):
            data = dict(draft)
        else:
            raise ValidationError([ValidationIssue(
                field="draft",
                issue_type="invalid_type",
                message=f"Expected a mapping of subscription fields, got {type(draft).__name__}",
            )])

        price, price_issue = self._check_price(data.get("price"))
        issues = [
            issue
            for issue in (self._check_name(data.get("name")), price_issue)
            if issue is not None
        ]
        if issues:
            raise ValidationError(issues)

        data["price"] = price

        if self._default_currency and not data.get("currency"):
            data["currency"] = self._default_currency
        # The identifier is assigned by the store, never by the caller
        data.pop("id", None)

        try:
            return SubscriptionDraft.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError([
                ValidationIssue(
                    field=_field_name(error["loc"]),
                    issue_type=error["type"],
                    message=error["msg"],
                )
                for error in e.errors()
            ]) from e
