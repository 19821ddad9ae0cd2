"""
HTTP client for the Activity Log API.

Used by the Streamlit frontend. Turns `success: false` responses and
transport failures into `APIClientError` with a message fit for the user.
"""

from typing import Any, Optional

import httpx

from activity_log.config import get_settings
from activity_log.models.activity import Activity, ActivityInput


ACTIVITIES_PATH = "/api/activities"


class APIClientError(Exception):
    """The API call failed or returned success: false."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ActivityAPIClient:
    """Synchronous client over `httpx.Client`."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        if http_client is None:
            settings = get_settings().app
            http_client = httpx.Client(
                base_url=base_url or settings.api_base_url,
                timeout=timeout or settings.api_timeout_seconds,
            )
        self._http = http_client

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ActivityAPIClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def _call(self, method: str, json: Optional[dict] = None) -> dict:
        try:
            response = self._http.request(method, ACTIVITIES_PATH, json=json)
        except httpx.HTTPError as e:
            raise APIClientError(f"Could not reach the server: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            raise APIClientError(
                f"Unexpected response from server (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        if not isinstance(payload, dict) or not payload.get("success"):
            error = "Request failed"
            if isinstance(payload, dict):
                error = payload.get("error") or error
                if payload.get("details"):
                    error = f"{error}: {payload['details']}"
            raise APIClientError(error, status_code=response.status_code)

        return payload

    def list_activities(self) -> list[Activity]:
        payload = self._call("GET")
        return [Activity(**item) for item in payload.get("data") or []]

    def add_activity(self, activity: ActivityInput) -> str:
        """Create an activity; returns the server's message."""
        payload = self._call("POST", json=activity.model_dump())
        return payload.get("message", "")

    def delete_activity(self, activity_id: str) -> str:
        payload = self._call("DELETE", json={"id": activity_id})
        return payload.get("message", "")

    def clear_all(self) -> str:
        payload = self._call("DELETE", json={"clearAll": True})
        return payload.get("message", "")
