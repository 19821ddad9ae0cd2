"""
Core Data Models for Activity Log

These models define the schemas for all data flowing through the system:
1. `ActivityInput` - what the form sends when creating an entry
2. `Activity` - a stored entry as read back from Notion
3. `ActivitySummary` - per-category statistics for the view page

DESIGN DECISION: `Activity` fields are plain strings rather than `date`/`time`
types. Records read from Notion may be partially populated, and decoding
must degrade to empty strings instead of failing.
"""

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================

class ActivityCategory(str, Enum):
    """
    Categories offered by the entry form.

    The API does not enforce this list; the frontend restricts input to it.
    """
    COMPETITIVE_TRADING = "Competitive Trading"
    FEE = "Fee"
    CAIR_AIRDROP = "Cair AirDrop"

    @classmethod
    def values(cls) -> list[str]:
        return [c.value for c in cls]


# =============================================================================
# AMOUNT COERCION
# =============================================================================

def coerce_amount(value: Any) -> int:
    """
    Coerce a user-supplied amount to a non-negative integer.

    Never raises. Missing, empty, non-numeric, non-finite and negative
    values become 0; numeric strings and floats are truncated.

    >>> coerce_amount("50")
    50
    >>> coerce_amount("12.9")
    12
    >>> coerce_amount("abc")
    0
    """
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, int):
        number: float = value
    elif isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return 0
    else:
        return 0

    if isinstance(number, float) and not math.isfinite(number):
        return 0

    result = int(number)
    return result if result > 0 else 0


# =============================================================================
# ACTIVITY MODELS
# =============================================================================

class ActivityInput(BaseModel):
    """
    Payload for creating an activity.

    `date`, `time` and `category` are required and must be non-empty.
    `amount` accepts anything and is coerced (see `coerce_amount`).
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    date: str = Field(
        ...,
        min_length=1,
        description="Calendar date, YYYY-MM-DD"
    )
    time: str = Field(
        ...,
        min_length=1,
        description="Time of day, free text"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Activity category"
    )
    note: str = Field(
        default="",
        description="Free-text note"
    )
    amount: int = Field(
        default=0,
        ge=0,
        description="Non-negative integer amount"
    )

    @field_validator('note', mode='before')
    @classmethod
    def default_note(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator('amount', mode='before')
    @classmethod
    def coerce(cls, v: Any) -> int:
        return coerce_amount(v)

    @property
    def is_known_category(self) -> bool:
        return self.category in ActivityCategory.values()


class Activity(BaseModel):
    """A stored activity as returned by the list operation."""

    id: str = ""
    date: str = ""
    time: str = ""
    category: str = ""
    note: str = ""
    amount: int = 0


# =============================================================================
# SUMMARY MODELS
# =============================================================================

class CategorySummary(BaseModel):
    """Count and total amount for one category."""
    category: str
    count: int = 0
    total_amount: int = 0


class ActivitySummary(BaseModel):
    """Statistics shown above the activity list."""
    total_count: int = 0
    total_amount: int = 0
    categories: list[CategorySummary] = Field(default_factory=list)

    def for_category(self, category: str) -> CategorySummary:
        for item in self.categories:
            if item.category == category:
                return item
        return CategorySummary(category=category)
