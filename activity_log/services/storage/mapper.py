"""
Notion Page <-> Activity Mapping

Pure translation between `Activity` and the Notion property schema:

    Date      -> date      {"date": {"start": "2024-01-15"}}
    Time      -> rich_text {"rich_text": [{"text": {"content": "09:30"}}]}
    Category  -> select    {"select": {"name": "Fee"}}
    Note      -> rich_text
    Amount    -> number    {"number": 50}

Decoding is defensive: pages with missing or unexpected properties still
produce an Activity, with defaults in place of the unreadable fields.
"""

from typing import Any, Optional

from activity_log.audit.logger import get_logger
from activity_log.config.settings import NotionSettings
from activity_log.models.activity import Activity, ActivityInput, coerce_amount


# Notion rejects rich_text segments longer than this
RICH_TEXT_SEGMENT_LIMIT = 2000


logger = get_logger(__name__)


class PropertyNames:
    """Names of the Notion database columns."""

    def __init__(
        self,
        date: str = "Date",
        time: str = "Time",
        category: str = "Category",
        note: str = "Note",
        amount: str = "Amount",
    ):
        self.date = date
        self.time = time
        self.category = category
        self.note = note
        self.amount = amount

    @classmethod
    def from_settings(cls, settings: NotionSettings) -> "PropertyNames":
        return cls(
            date=settings.prop_date,
            time=settings.prop_time,
            category=settings.prop_category,
            note=settings.prop_note,
            amount=settings.prop_amount,
        )


def _rich_text(content: str) -> list[dict]:
    """Encode text as rich_text segments, splitting at the segment limit."""
    if not content:
        return [{"text": {"content": ""}}]
    return [
        {"text": {"content": content[i:i + RICH_TEXT_SEGMENT_LIMIT]}}
        for i in range(0, len(content), RICH_TEXT_SEGMENT_LIMIT)
    ]


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _read_rich_text(prop: dict) -> Optional[str]:
    segments = prop.get("rich_text")
    if not isinstance(segments, list) or not segments:
        return None

    parts = []
    for segment in segments:
        segment = _as_dict(segment)
        text = segment.get("plain_text")
        if not isinstance(text, str):
            text = _as_dict(segment.get("text")).get("content")
        if isinstance(text, str):
            parts.append(text)
    return "".join(parts) if parts else None


def _read_date(prop: dict) -> Optional[str]:
    start = _as_dict(prop.get("date")).get("start")
    return start if isinstance(start, str) else None


def _read_select(prop: dict) -> Optional[str]:
    name = _as_dict(prop.get("select")).get("name")
    return name if isinstance(name, str) else None


def _read_number(prop: dict) -> Optional[int]:
    number = prop.get("number")
    if isinstance(number, bool) or not isinstance(number, (int, float)):
        return None
    return coerce_amount(number)


class ActivityPageMapper:
    """
    Translates between activities and Notion page properties.

    Stateless apart from the configured property names.
    """

    def __init__(self, names: Optional[PropertyNames] = None):
        self.names = names or PropertyNames()

    def encode(self, activity: ActivityInput) -> dict[str, Any]:
        """Build the `properties` object for a page create call."""
        n = self.names
        return {
            n.date: {"date": {"start": activity.date}},
            n.time: {"rich_text": _rich_text(activity.time)},
            n.category: {"select": {"name": activity.category}},
            n.note: {"rich_text": _rich_text(activity.note or "")},
            n.amount: {"number": coerce_amount(activity.amount)},
        }

    def decode(self, page: Any) -> Activity:
        """
        Read an Activity from a Notion page object.

        Never raises. Unreadable fields take their defaults and are
        reported in a debug log line.
        """
        page = _as_dict(page)
        props = _as_dict(page.get("properties"))
        n = self.names

        fields = {
            "date": _read_date(_as_dict(props.get(n.date))),
            "time": _read_rich_text(_as_dict(props.get(n.time))),
            "category": _read_select(_as_dict(props.get(n.category))),
            "note": _read_rich_text(_as_dict(props.get(n.note))),
            "amount": _read_number(_as_dict(props.get(n.amount))),
        }
        page_id = page.get("id")
        if not isinstance(page_id, str):
            page_id = ""

        defaulted = [name for name, value in fields.items() if value is None]
        # An empty note is the normal case, not schema drift
        if fields["note"] is None and n.note in props:
            defaulted.remove("note")
        if defaulted or not page_id:
            logger.debug(
                "activity_fields_defaulted",
                page_id=page_id,
                fields=defaulted + ([] if page_id else ["id"]),
            )

        return Activity(
            id=page_id,
            date=fields["date"] or "",
            time=fields["time"] or "",
            category=fields["category"] or "",
            note=fields["note"] or "",
            amount=fields["amount"] or 0,
        )
