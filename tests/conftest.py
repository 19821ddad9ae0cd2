"""
Shared fixtures.

`FakeNotionClient` stands in for `NotionClient` and mimics the parts of
Notion the storage relies on: archived pages are excluded from queries,
sorts are applied, results are paginated and unknown page IDs are 404s.
"""

from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from activity_log.api.app import create_app
from activity_log.config.settings import NotionSettings
from activity_log.services.storage import (
    ActivityPageMapper,
    NotFoundError,
    NotionActivityStorage,
    StorageError,
)


def _response_properties(properties: dict) -> dict:
    """Turn request-side properties into what Notion sends back."""
    result = {}
    for name, prop in properties.items():
        if "rich_text" in prop:
            segments = [
                {
                    "type": "text",
                    "text": {"content": seg["text"]["content"], "link": None},
                    "plain_text": seg["text"]["content"],
                }
                for seg in prop["rich_text"]
                if seg["text"]["content"]
            ]
            result[name] = {"type": "rich_text", "rich_text": segments}
        elif "date" in prop:
            result[name] = {
                "type": "date",
                "date": {"start": prop["date"]["start"], "end": None},
            }
        elif "select" in prop:
            result[name] = {"type": "select", "select": {"name": prop["select"]["name"]}}
        elif "number" in prop:
            result[name] = {"type": "number", "number": prop["number"]}
    return result


def _sort_value(page: dict, name: str) -> str:
    prop = page["properties"].get(name, {})
    if prop.get("type") == "date":
        return (prop.get("date") or {}).get("start") or ""
    if prop.get("type") == "rich_text":
        return "".join(s["plain_text"] for s in prop.get("rich_text", []))
    return ""


class FakeNotionClient:
    """In-memory Notion database."""

    def __init__(self, page_size: int = 100):
        self.settings = NotionSettings(token="test-token", database_id="test-db")
        self.page_size = page_size
        self.pages: dict[str, dict] = {}
        self.create_calls: list[dict] = []
        self.query_calls: list[dict] = []
        self.archive_calls: list[str] = []
        self.fail_archive_ids: set[str] = set()
        self.fail_create = False
        self.fail_query = False
        self._counter = 0

    @property
    def database_id(self) -> str:
        return self.settings.database_id

    def add_raw_page(self, page: dict) -> None:
        self.pages[page["id"]] = page

    async def create_page(self, properties: dict[str, Any]) -> dict[str, Any]:
        self.create_calls.append(properties)
        if self.fail_create:
            raise StorageError("Notion API error 400 (validation_error): bad schema")
        self._counter += 1
        page = {
            "object": "page",
            "id": f"page-{self._counter:04d}",
            "archived": False,
            "properties": _response_properties(properties),
        }
        self.pages[page["id"]] = page
        return page

    async def query_database(
        self,
        sorts: Optional[list[dict]] = None,
        start_cursor: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> dict[str, Any]:
        self.query_calls.append({"sorts": sorts, "start_cursor": start_cursor})
        if self.fail_query:
            raise StorageError("Notion API error 500 (internal_server_error): boom")

        active = [p for p in self.pages.values() if not p["archived"]]
        for sort in reversed(sorts or []):
            active.sort(
                key=lambda p: _sort_value(p, sort["property"]),
                reverse=sort["direction"] == "descending",
            )

        size = page_size or self.page_size
        start = int(start_cursor) if start_cursor else 0
        chunk = active[start:start + size]
        has_more = start + size < len(active)
        return {
            "object": "list",
            "results": chunk,
            "has_more": has_more,
            "next_cursor": str(start + size) if has_more else None,
        }

    async def archive_page(self, page_id: str) -> dict[str, Any]:
        self.archive_calls.append(page_id)
        if page_id in self.fail_archive_ids:
            raise StorageError(f"Notion API error 409 (conflict_error): {page_id}")
        if page_id not in self.pages:
            raise NotFoundError(
                f"Notion API error 404 (object_not_found): {page_id}"
            )
        self.pages[page_id]["archived"] = True
        return self.pages[page_id]


@pytest.fixture
def fake_notion() -> FakeNotionClient:
    return FakeNotionClient()


@pytest.fixture
def response_properties():
    return _response_properties


@pytest.fixture
def mapper() -> ActivityPageMapper:
    return ActivityPageMapper()


@pytest.fixture
def storage(fake_notion: FakeNotionClient, mapper: ActivityPageMapper) -> NotionActivityStorage:
    return NotionActivityStorage(fake_notion, mapper)


@pytest.fixture
def api_client(storage: NotionActivityStorage):
    with TestClient(create_app(storage=storage)) as client:
        yield client
