"""
Notion Storage Implementation

DESIGN DECISION: A Notion database is the storage backend because:
1. The user can read and edit their log directly in Notion
2. No database to run or back up
3. Archived pages stay recoverable from Notion's trash

TRADEOFFS:
- No transactions: clear-all archives pages one by one and may stop halfway
- No bulk update endpoint: one HTTP call per archived page
- Query results are paginated (at most 100 pages per call)

The implementation follows the abstract interface, so the HTTP layer
never sees Notion's page/property schema.
"""

import asyncio
from typing import Any, Optional

import httpx

from activity_log.audit.logger import get_logger
from activity_log.config import get_settings
from activity_log.config.settings import NotionSettings
from activity_log.models.activity import Activity, ActivityInput
from activity_log.services.storage.interface import (
    ActivityStorageInterface,
    AuthenticationError,
    ClearAllError,
    ClearAllResult,
    ConnectionError,
    NotFoundError,
    StorageError,
)
from activity_log.services.storage.mapper import ActivityPageMapper, PropertyNames


logger = get_logger(__name__)


class NotionClient:
    """
    Low-level Notion REST client.

    Wraps one `httpx.AsyncClient` carrying the auth and version headers.
    Create it once per process and share it; call `aclose()` on shutdown.
    """

    def __init__(
        self,
        settings: Optional[NotionSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings or get_settings().notion
        self._http = http_client or httpx.AsyncClient(
            base_url=self._settings.base_url,
            timeout=httpx.Timeout(self._settings.timeout_seconds),
        )
        self._headers = {
            "Authorization": f"Bearer {self._settings.token}",
            "Notion-Version": self._settings.api_version,
            "Content-Type": "application/json",
        }

    @property
    def database_id(self) -> str:
        return self._settings.database_id

    @property
    def settings(self) -> NotionSettings:
        return self._settings

    async def __aenter__(self) -> "NotionClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[dict] = None,
        not_found_codes: tuple[str, ...] = ("object_not_found",),
    ) -> dict[str, Any]:
        """Send one request and map failures onto storage errors."""
        try:
            response = await self._http.request(
                method, path, json=json, headers=self._headers
            )
        except httpx.TimeoutException as e:
            raise ConnectionError(f"Notion request timed out: {method} {path}") from e
        except httpx.HTTPError as e:
            raise ConnectionError(f"Could not reach Notion: {e}") from e

        if response.status_code < 400:
            try:
                return response.json()
            except ValueError as e:
                raise StorageError(
                    f"Notion returned invalid JSON for {method} {path}"
                ) from e

        code, message = self._error_details(response)
        detail = f"Notion API error {response.status_code} ({code}): {message}"
        if response.status_code == 404 or code in not_found_codes:
            raise NotFoundError(detail)
        if response.status_code in (401, 403):
            raise AuthenticationError(detail)
        raise StorageError(detail)

    @staticmethod
    def _error_details(response: httpx.Response) -> tuple[str, str]:
        try:
            body = response.json()
        except ValueError:
            return "unknown", response.text[:200]
        if not isinstance(body, dict):
            return "unknown", str(body)[:200]
        return str(body.get("code", "unknown")), str(body.get("message", ""))

    async def create_page(self, properties: dict[str, Any]) -> dict[str, Any]:
        """Create a page in the configured database."""
        return await self._request(
            "POST",
            "/pages",
            json={
                "parent": {"database_id": self.database_id},
                "properties": properties,
            },
        )

    async def query_database(
        self,
        sorts: Optional[list[dict]] = None,
        start_cursor: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> dict[str, Any]:
        """Query one page of results. Archived pages are never returned."""
        body: dict[str, Any] = {"page_size": page_size or self._settings.page_size}
        if sorts:
            body["sorts"] = sorts
        if start_cursor:
            body["start_cursor"] = start_cursor
        return await self._request(
            "POST", f"/databases/{self.database_id}/query", json=body
        )

    async def archive_page(self, page_id: str) -> dict[str, Any]:
        """Soft-delete a page.

        Notion answers a malformed page id with 400 validation_error; for an
        id-addressed call that is the same as no such page.
        """
        return await self._request(
            "PATCH",
            f"/pages/{page_id}",
            json={"archived": True},
            not_found_codes=("object_not_found", "validation_error"),
        )


class NotionActivityStorage(ActivityStorageInterface):
    """
    Notion implementation of activity storage.

    Each activity is one page in the database; the page ID is the
    activity ID.
    """

    def __init__(
        self,
        client: NotionClient,
        mapper: Optional[ActivityPageMapper] = None,
    ):
        self._client = client
        self._mapper = mapper or ActivityPageMapper(
            PropertyNames.from_settings(client.settings)
        )

    def _sorts(self) -> list[dict]:
        names = self._mapper.names
        return [
            {"property": names.date, "direction": "descending"},
            {"property": names.time, "direction": "descending"},
        ]

    async def create_activity(self, activity: ActivityInput) -> dict[str, Any]:
        """Create a page for the activity."""
        try:
            return await self._client.create_page(self._mapper.encode(activity))
        except StorageError as e:
            logger.error(
                "create_activity_failed",
                error=str(e),
                date=activity.date,
                category=activity.category,
            )
            raise

    async def get_activities(self) -> list[Activity]:
        """Fetch every active page, following pagination cursors."""
        activities: list[Activity] = []
        cursor: Optional[str] = None
        try:
            while True:
                response = await self._client.query_database(
                    sorts=self._sorts(),
                    start_cursor=cursor,
                )
                results = response.get("results") or []
                activities.extend(self._mapper.decode(page) for page in results)

                cursor = response.get("next_cursor")
                if not response.get("has_more") or not cursor:
                    break
        except StorageError as e:
            logger.error(
                "get_activities_failed",
                error=str(e),
                fetched=len(activities),
            )
            raise
        return activities

    async def delete_activity(self, activity_id: str) -> bool:
        """Archive one page."""
        try:
            await self._client.archive_page(activity_id)
        except StorageError as e:
            logger.error(
                "delete_activity_failed",
                error=str(e),
                activity_id=activity_id,
            )
            raise
        return True

    async def clear_all_activities(self) -> ClearAllResult:
        """
        Archive every active page concurrently.

        All archive calls are started together and awaited together;
        failures do not cancel the others and successes are not undone.
        """
        try:
            activities = await self.get_activities()
        except StorageError as e:
            logger.error("clear_all_activities_failed", error=str(e), stage="list")
            raise

        ids = [a.id for a in activities if a.id]
        if not ids:
            return ClearAllResult()

        outcomes = await asyncio.gather(
            *(self._client.archive_page(page_id) for page_id in ids),
            return_exceptions=True,
        )

        archived: list[str] = []
        failed: dict[str, str] = {}
        for page_id, outcome in zip(ids, outcomes):
            if isinstance(outcome, BaseException):
                failed[page_id] = str(outcome)
            else:
                archived.append(page_id)

        if failed:
            error = ClearAllError(archived_ids=archived, failed=failed)
            logger.error(
                "clear_all_activities_failed",
                stage="archive",
                archived=len(archived),
                failed=failed,
            )
            raise error

        return ClearAllResult(archived_ids=archived)
