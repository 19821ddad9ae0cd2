"""
Activity Summaries

Deterministic filtering and aggregation over listed activities, used by
the view page for its statistics cards and category filter.

Works on already-fetched data; never calls storage itself.
"""

from typing import Iterable, Optional

from activity_log.models.activity import (
    Activity,
    ActivityCategory,
    ActivitySummary,
    CategorySummary,
)


def filter_by_category(
    activities: Iterable[Activity],
    category: Optional[str] = None,
) -> list[Activity]:
    """Keep activities of one category; no category means keep all."""
    if not category:
        return list(activities)
    return [a for a in activities if a.category == category]


def summarize(activities: Iterable[Activity]) -> ActivitySummary:
    """
    Count activities and total their amounts per category.

    Known categories come first in their enum order, followed by any
    other category in order of first appearance.
    """
    counts: dict[str, CategorySummary] = {}
    total_count = 0
    total_amount = 0

    for activity in activities:
        item = counts.get(activity.category)
        if item is None:
            item = counts[activity.category] = CategorySummary(
                category=activity.category
            )
        item.count += 1
        item.total_amount += activity.amount
        total_count += 1
        total_amount += activity.amount

    known = ActivityCategory.values()
    ordered = [counts[c] for c in known if c in counts]
    ordered += [item for name, item in counts.items() if name not in known]

    return ActivitySummary(
        total_count=total_count,
        total_amount=total_amount,
        categories=ordered,
    )
