"""
Tests for the HTTP service, driven in-process through FastAPI's TestClient.
"""

from __future__ import annotations

from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient

from workspace_daemon.chat import ToolCall
from workspace_daemon.config import SERVICE_NAME, Settings
from workspace_daemon.planner import PlannerTurn
from workspace_daemon.server import create_app
from workspace_daemon.tools import ToolRegistry

USER = "owner@example.com"


@pytest.fixture
def settings() -> Settings:
    return Settings(user_google_email=USER, composio_project_id="proj_1")


@pytest.fixture
def client(settings: Settings, catalogue: ToolRegistry) -> Iterator[TestClient]:
    """Client without a planner: chat is disabled."""
    with TestClient(create_app(settings, registry=catalogue)) as client:
        yield client


def _chat_client(
    settings: Settings, registry: ToolRegistry, planner: Any
) -> TestClient:
    return TestClient(create_app(settings, registry=registry, planner=planner))


class TestHealth:
    """Tests for /health and /status."""

    def test_health(self, client: TestClient, catalogue: ToolRegistry) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["service"] == SERVICE_NAME
        assert data["tools_count"] == len(catalogue)
        assert data["user_id"] == USER
        assert data["uptime_seconds"] >= 0

    def test_status_without_planner(self, client: TestClient) -> None:
        data = client.get("/status").json()
        assert data["initialized"] is True
        assert data["tools_ready"] is True
        assert data["project_id"] == "proj_1"
        assert data["planner_configured"] is False

    def test_status_with_planner(
        self, settings: Settings, catalogue: ToolRegistry, planner_factory: Any
    ) -> None:
        with _chat_client(settings, catalogue, planner_factory()) as client:
            assert client.get("/status").json()["planner_configured"] is True


class TestToolEndpoints:
    """Tests for tool listing and direct invocation."""

    def test_list_tools(self, client: TestClient, catalogue: ToolRegistry) -> None:
        tools = client.get("/v1/tools").json()
        assert len(tools) == len(catalogue)
        assert {"name", "display_name", "description", "parameters"} <= set(tools[0])

    def test_get_tool(self, client: TestClient) -> None:
        data = client.get("/v1/tools/GMAIL_SEND_EMAIL").json()
        assert data["display_name"]
        assert "user_google_email" in data["parameters"]["required"]

    def test_get_unknown_tool(self, client: TestClient) -> None:
        assert client.get("/v1/tools/NOPE").status_code == 404

    def test_list_profiles(self, client: TestClient) -> None:
        profiles = client.get("/v1/profiles").json()
        assert [p["name"] for p in profiles] == ["workspace", "mail", "calendar", "documents"]

    def test_invoke_tool(self, client: TestClient) -> None:
        response = client.post(
            "/v1/invoke-tool",
            json={
                "tool_name": "GMAIL_SEND_EMAIL",
                "arguments": {
                    "to": "bob@example.com",
                    "subject": "Hi",
                    "body": "Hello",
                    "user_google_email": USER,
                },
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["tool_name"] == "GMAIL_SEND_EMAIL"
        assert data["result"]["succeeded"] is True
        assert data["result"]["data"]["recipient"] == "bob@example.com"
        assert data["latency_ms"] >= 0

    def test_invoke_validation_failure_in_envelope(self, client: TestClient) -> None:
        response = client.post(
            "/v1/invoke-tool",
            json={"tool_name": "GMAIL_SEND_EMAIL", "arguments": {"to": "bob@example.com"}},
        )
        assert response.status_code == 200
        result = response.json()["result"]
        assert result["succeeded"] is False
        assert result["error_type"] == "MissingField"

    def test_invoke_unknown_tool(self, client: TestClient) -> None:
        response = client.post("/v1/invoke-tool", json={"tool_name": "NOPE"})
        assert response.status_code == 404

    def test_invoke_batch_keeps_order(self, client: TestClient) -> None:
        labels = {"tool_name": "GMAIL_LIST_LABELS", "arguments": {"user_google_email": USER}}
        calendars = {"tool_name": "CALENDAR_LIST_CALENDARS", "arguments": {"user_google_email": USER}}
        response = client.post(
            "/v1/invoke-batch",
            json={"requests": [labels, {"tool_name": "NOPE"}, calendars]},
        )
        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["identifier"] for r in results] == [
            "GMAIL_LIST_LABELS",
            "NOPE",
            "CALENDAR_LIST_CALENDARS",
        ]
        assert [r["succeeded"] for r in results] == [True, False, True]
        assert results[1]["error_type"] == "UnknownIdentifier"


class TestChatEndpoint:
    """Tests for /v1/chat."""

    def test_no_planner(self, client: TestClient) -> None:
        response = client.post("/v1/chat", json={"message": "hi"})
        assert response.status_code == 503

    def test_unknown_profile(self, client: TestClient) -> None:
        response = client.post("/v1/chat", json={"message": "hi", "profile": "pirate"})
        assert response.status_code == 400

    def test_unknown_tool_name(
        self, settings: Settings, catalogue: ToolRegistry, planner_factory: Any
    ) -> None:
        with _chat_client(settings, catalogue, planner_factory()) as client:
            response = client.post("/v1/chat", json={"message": "hi", "tool_names": ["NOPE"]})
        assert response.status_code == 400

    def test_chat_with_tool_round(
        self, settings: Settings, catalogue: ToolRegistry, planner_factory: Any
    ) -> None:
        planner = planner_factory([
            PlannerTurn(
                "",
                (ToolCall("GMAIL_LIST_LABELS", {"user_google_email": USER}, "toolu_1"),),
                "tool_use",
            ),
            PlannerTurn("You have no custom labels."),
        ])
        with _chat_client(settings, catalogue, planner) as client:
            response = client.post(
                "/v1/chat",
                json={
                    "message": "what labels do I have?",
                    "profile": "mail",
                    "history": [
                        {"role": "user", "content": "hello"},
                        {"role": "assistant", "content": "hi"},
                    ],
                },
            )

        assert response.status_code == 200
        data = response.json()
        assert data["content"] == "You have no custom labels."
        assert data["finished"] is True
        assert data["rounds_used"] == 2
        assert data["tool_calls"] == [
            {"name": "GMAIL_LIST_LABELS", "arguments": {"user_google_email": USER}, "id": "toolu_1"}
        ]
        assert data["tool_results"][0]["result"]["succeeded"] is True
        assert [m.content for m in planner.calls[0]["conversation"]] == [
            "hello",
            "hi",
            "what labels do I have?",
        ]

    def test_round_limit_from_settings(
        self, catalogue: ToolRegistry, planner_factory: Any
    ) -> None:
        looping = planner_factory([
            PlannerTurn(
                "",
                (ToolCall("GMAIL_LIST_LABELS", {"user_google_email": USER}, f"t{i}"),),
                "tool_use",
            )
            for i in range(5)
        ])
        settings = Settings(user_google_email=USER, max_tool_rounds=2)
        with _chat_client(settings, catalogue, looping) as client:
            data = client.post("/v1/chat", json={"message": "loop"}).json()

        assert data["finished"] is False
        assert data["rounds_used"] == 2


class TestTriggerEndpoints:
    """Tests for trigger registration and event delivery."""

    def test_trigger_lifecycle(self, client: TestClient) -> None:
        created = client.post(
            "/v1/triggers",
            json={"trigger_slug": "GMAIL_NEW_GMAIL_MESSAGE", "connected_account_id": "ca_9"},
        ).json()
        assert created["trigger_id"].startswith("trg_")
        assert created["user_id"] == USER
        assert created["config"]["labelIds"] == "INBOX"

        listed = client.get("/v1/triggers").json()
        assert [t["trigger_id"] for t in listed] == [created["trigger_id"]]

        delivered = client.post(
            f"/v1/triggers/{created['trigger_id']}/events", json={"payload": {"id": "m1"}}
        ).json()
        assert delivered == {"trigger_id": created["trigger_id"], "delivered": 0}

        assert client.delete(f"/v1/triggers/{created['trigger_id']}").status_code == 200
        assert client.delete(f"/v1/triggers/{created['trigger_id']}").status_code == 404
        assert client.get("/v1/triggers").json() == []

    def test_events_delivered_to_subscribers(self, client: TestClient) -> None:
        hub = client.app.state.workspace.triggers
        received: list[dict[str, Any]] = []

        async def handler(event: Any) -> None:
            received.append(event.payload)

        hub.subscribe(handler)
        trigger_id = client.post(
            "/v1/triggers", json={"trigger_slug": "GMAIL_NEW_GMAIL_MESSAGE"}
        ).json()["trigger_id"]

        response = client.post(f"/v1/triggers/{trigger_id}/events", json={"payload": {"id": "m7"}})

        assert response.json()["delivered"] == 1
        assert received == [{"id": "m7"}]

    def test_event_for_unknown_trigger(self, client: TestClient) -> None:
        response = client.post("/v1/triggers/trg_missing/events", json={"payload": {}})
        assert response.status_code == 404

    def test_gmail_trigger_requires_planner(self, client: TestClient) -> None:
        response = client.post("/v1/triggers/gmail", json={})
        assert response.status_code == 503
        assert client.get("/v1/triggers").json() == []

    def test_gmail_trigger_logged_by_assistant(
        self, settings: Settings, catalogue: ToolRegistry, planner_factory: Any
    ) -> None:
        with _chat_client(settings, catalogue, planner_factory()) as client:
            response = client.post("/v1/triggers/gmail", json={"connected_account_id": "ca_3"})
            assert response.status_code == 200
            created = response.json()
            assert created["trigger_slug"] == "GMAIL_NEW_GMAIL_MESSAGE"
            assert created["user_id"] == USER
            assert created["connected_account_id"] == "ca_3"
            assert created["config"]["labelIds"] == "INBOX"

            delivered = client.post(
                f"/v1/triggers/{created['trigger_id']}/events", json={"payload": {"id": "m1"}}
            ).json()
            assert delivered == {"trigger_id": created["trigger_id"], "delivered": 1}


class TestShutdown:
    """Tests for the opt-in remote shutdown."""

    def test_disabled_by_default(self, client: TestClient) -> None:
        assert client.post("/shutdown").status_code == 403

    def test_get_not_allowed(self, client: TestClient) -> None:
        assert client.get("/shutdown").status_code == 405
