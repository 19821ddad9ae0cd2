"""Tests for the frontend's API client."""

import json

import httpx
import pytest

from activity_log.client import ActivityAPIClient, APIClientError
from activity_log.models.activity import ActivityInput


def make_client(handler) -> ActivityAPIClient:
    http = httpx.Client(
        base_url="http://api.test",
        transport=httpx.MockTransport(handler),
    )
    return ActivityAPIClient(http_client=http)


class TestActivityAPIClient:
    """Tests for ActivityAPIClient."""

    def test_list_activities(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/api/activities"
            return httpx.Response(200, json={
                "success": True,
                "data": [{"id": "p1", "date": "2024-01-15", "time": "09:30",
                          "category": "Fee", "note": "", "amount": 50}],
            })

        with make_client(handler) as client:
            [activity] = client.list_activities()
        assert activity.id == "p1"
        assert activity.amount == 50

    def test_add_activity_sends_payload(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"success": True, "message": "Activity added"})

        with make_client(handler) as client:
            message = client.add_activity(
                ActivityInput(date="2024-01-15", time="09:30", category="Fee", amount=5)
            )

        assert message == "Activity added"
        assert seen["body"] == {
            "date": "2024-01-15",
            "time": "09:30",
            "category": "Fee",
            "note": "",
            "amount": 5,
        }

    def test_delete_and_clear_bodies(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "DELETE"
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"success": True, "message": "ok"})

        with make_client(handler) as client:
            client.delete_activity("p1")
            client.clear_all()

        assert bodies == [{"id": "p1"}, {"clearAll": True}]

    def test_failure_raises_with_details(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={
                "success": False, "error": "server error", "details": "boom",
            })

        with make_client(handler) as client:
            with pytest.raises(APIClientError, match="server error: boom") as exc_info:
                client.list_activities()
        assert exc_info.value.status_code == 500

    def test_non_json_response(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        with make_client(handler) as client:
            with pytest.raises(APIClientError, match="HTTP 502"):
                client.list_activities()

    def test_unreachable_server(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with make_client(handler) as client:
            with pytest.raises(APIClientError, match="Could not reach"):
                client.clear_all()
