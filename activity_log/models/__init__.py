"""
Data Models Package

This package contains all Pydantic models used in Activity Log.
"""

from activity_log.models.activity import (
    Activity,
    ActivityCategory,
    ActivityInput,
    ActivitySummary,
    CategorySummary,
    coerce_amount,
)

__all__ = [
    "Activity",
    "ActivityCategory",
    "ActivityInput",
    "ActivitySummary",
    "CategorySummary",
    "coerce_amount",
]
