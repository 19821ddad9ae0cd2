"""Activity query package."""

from activity_log.queries.summary import filter_by_category, summarize

__all__ = ["filter_by_category", "summarize"]
