"""
Tests for Activity Log models

Test strategy:
1. Unit tests for models, mapping and summaries
2. Storage and API tests against an in-memory Notion fake
3. No real API calls in tests
"""

import pytest
from pydantic import ValidationError

from activity_log.models.activity import (
    Activity,
    ActivityCategory,
    ActivityInput,
    ActivitySummary,
    CategorySummary,
    coerce_amount,
)


class TestCoerceAmount:
    """Tests for amount coercion."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("50", 50),
            (" 75 ", 75),
            ("12.9", 12),
            (7, 7),
            (3.99, 3),
        ],
    )
    def test_numeric_values_truncate(self, value, expected):
        """Test numeric input becomes its truncated integer."""
        assert coerce_amount(value) == expected

    @pytest.mark.parametrize(
        "value",
        [None, "", "   ", "abc", "12abc", True, False, [], {}, float("nan"), float("inf"), "-5", -3],
    )
    def test_invalid_values_become_zero(self, value):
        """Test missing, non-numeric and negative input becomes 0."""
        assert coerce_amount(value) == 0


class TestActivityInput:
    """Tests for the create payload model."""

    def test_defaults(self):
        """Test note and amount defaults."""
        activity = ActivityInput(date="2024-01-15", time="09:30", category="Fee")
        assert activity.note == ""
        assert activity.amount == 0

    def test_amount_coerced(self):
        """Test amount strings are coerced rather than rejected."""
        activity = ActivityInput(
            date="2024-01-15", time="09:30", category="Fee", amount="50"
        )
        assert activity.amount == 50

        activity = ActivityInput(
            date="2024-01-15", time="09:30", category="Fee", amount="lots"
        )
        assert activity.amount == 0

    def test_none_note_becomes_empty(self):
        activity = ActivityInput(
            date="2024-01-15", time="09:30", category="Fee", note=None
        )
        assert activity.note == ""

    def test_blank_required_field_rejected(self):
        """Test whitespace-only required fields are rejected."""
        with pytest.raises(ValidationError):
            ActivityInput(date="   ", time="09:30", category="Fee")

    def test_unknown_category_allowed(self):
        """Test the model does not enforce the category list."""
        activity = ActivityInput(date="2024-01-15", time="09:30", category="Other")
        assert activity.category == "Other"
        assert activity.is_known_category is False

    def test_known_category(self):
        activity = ActivityInput(
            date="2024-01-15", time="09:30", category="Cair AirDrop"
        )
        assert activity.is_known_category is True


class TestActivity:
    """Tests for the stored activity model."""

    def test_all_fields_default(self):
        activity = Activity()
        assert activity.model_dump() == {
            "id": "",
            "date": "",
            "time": "",
            "category": "",
            "note": "",
            "amount": 0,
        }


class TestActivityCategories:
    """Tests for the category enum."""

    def test_category_values(self):
        assert ActivityCategory.values() == ["Competitive Trading", "Fee", "Cair AirDrop"]
        assert ActivityCategory("Fee") is ActivityCategory.FEE


class TestActivitySummary:
    """Tests for the summary model."""

    def test_for_category_missing_returns_empty(self):
        summary = ActivitySummary(categories=[CategorySummary(category="Fee", count=2)])
        assert summary.for_category("Fee").count == 2
        assert summary.for_category("Cair AirDrop").count == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
