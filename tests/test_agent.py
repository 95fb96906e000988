"""
Tests for the direct-dispatch workspace agent.
"""

from __future__ import annotations

from typing import Any

import pytest

from workspace_daemon.agent import CAPABILITIES, WorkspaceAgent
from workspace_daemon.errors import ServiceNotConnected
from workspace_daemon.tools import (
    Dispatcher,
    ExecutionContext,
    ToolExecutionError,
    ToolRegistry,
    tool,
)
from workspace_daemon.tools.google import calendar, drive, gmail
from workspace_daemon.tools.schema import integer, string

USER = "owner@example.com"


@pytest.fixture
def agent(catalogue: ToolRegistry) -> WorkspaceAgent:
    agent = WorkspaceAgent(catalogue, Dispatcher(catalogue), user_id=USER)
    agent.initialize()
    return agent


def _registry_with(*tools: Any) -> ToolRegistry:
    registry = ToolRegistry()
    registry.register_all(tools)
    return registry


class TestInitialization:
    """Tests for service detection and status."""

    def test_capabilities(self, catalogue: ToolRegistry) -> None:
        agent = WorkspaceAgent(catalogue, Dispatcher(catalogue))
        assert agent.get_capabilities() == list(CAPABILITIES)
        assert len(agent.get_capabilities()) == 6

    def test_default_services_connected(self, agent: WorkspaceAgent) -> None:
        assert agent.connected_services == ("gmail", "googlecalendar", "googledrive")

    def test_unknown_service_skipped(self, catalogue: ToolRegistry) -> None:
        agent = WorkspaceAgent(catalogue, Dispatcher(catalogue))
        assert agent.initialize(["gmail", "myspace"]) == ("gmail",)

    def test_service_without_tools_not_connected(self) -> None:
        registry = _registry_with(*gmail.TOOLS)
        agent = WorkspaceAgent(registry, Dispatcher(registry))
        assert agent.initialize() == ("gmail",)

    def test_status(self, agent: WorkspaceAgent, catalogue: ToolRegistry) -> None:
        status = agent.get_status()
        assert status["user_id"] == USER
        assert status["ready"] is True
        assert status["connected_services"] == ["gmail", "googlecalendar", "googledrive"]

        idle = WorkspaceAgent(catalogue, Dispatcher(catalogue)).get_status()
        assert idle["ready"] is False
        assert idle["connected_services"] == []


class TestOperations:
    """Tests for the single-tool operations."""

    @pytest.mark.asyncio
    async def test_send_email(self, agent: WorkspaceAgent) -> None:
        data = await agent.send_email("bob@example.com", "Hello", "Hi Bob")
        assert data["status"] == "sent"
        assert data["recipient"] == "bob@example.com"

    @pytest.mark.asyncio
    async def test_send_email_requires_gmail(self, catalogue: ToolRegistry) -> None:
        agent = WorkspaceAgent(catalogue, Dispatcher(catalogue))
        with pytest.raises(ServiceNotConnected) as exc:
            await agent.send_email("bob@example.com", "Hello", "Hi")
        assert "Gmail not connected" in str(exc.value)

    @pytest.mark.asyncio
    async def test_recent_emails_default_query(self, agent: WorkspaceAgent) -> None:
        data = await agent.get_recent_emails()
        assert data["query"] == "in:inbox"
        assert data["max_results"] == 10

    @pytest.mark.asyncio
    async def test_create_calendar_event(self, agent: WorkspaceAgent) -> None:
        data = await agent.create_calendar_event(
            "Review", "2025-01-15T10:00:00Z", "2025-01-15T11:00:00Z", attendees=["a@example.com"]
        )
        assert data["summary"] == "Review"
        assert data["attendees"] == [{"email": "a@example.com"}]
        assert data["creator"] == {"email": USER}

    @pytest.mark.asyncio
    async def test_upcoming_events(self, agent: WorkspaceAgent) -> None:
        data = await agent.get_upcoming_events(5)
        assert data["events"] == []
        assert data["summary"] == f"Calendar for {USER}"

    @pytest.mark.asyncio
    async def test_drive_operations(self, agent: WorkspaceAgent) -> None:
        uploaded = await agent.upload_to_drive("notes.txt", "hello", parent_folder_id="folder1")
        assert uploaded["name"] == "notes.txt"
        assert uploaded["size"] == 5

        found = await agent.search_drive_files("name contains 'notes'")
        assert found["files"] == []

    @pytest.mark.asyncio
    async def test_drive_requires_connection(self, catalogue: ToolRegistry) -> None:
        agent = WorkspaceAgent(catalogue, Dispatcher(catalogue))
        agent.initialize(["gmail"])
        with pytest.raises(ServiceNotConnected):
            await agent.search_drive_files("anything")

    @pytest.mark.asyncio
    async def test_failed_dispatch_raises(self) -> None:
        @tool(
            name="GMAIL_SEND_EMAIL",
            display_name="Send Email",
            description="Always bounces",
            fields=(string("to"), string("subject"), string("body"), string("user_google_email")),
        )
        def bouncing_send(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
            raise ConnectionError("smtp unavailable")

        registry = _registry_with(bouncing_send)
        agent = WorkspaceAgent(registry, Dispatcher(registry))
        agent.initialize(["gmail"])

        with pytest.raises(ToolExecutionError) as exc:
            await agent.send_email("bob@example.com", "Hi", "Hello")
        assert exc.value.result.error_type == "ConnectionError"


class TestWorkflows:
    """Tests for the multi-step workflows."""

    @pytest.mark.asyncio
    async def test_schedule_meeting_with_invites(self, agent: WorkspaceAgent) -> None:
        attendees = ["c@example.com", "a@example.com", "b@example.com"]
        outcome = await agent.schedule_meeting_with_invites(
            "Planning",
            "2025-01-15T10:00:00Z",
            "2025-01-15T11:00:00Z",
            attendees,
            agenda="1. Roadmap",
        )
        assert outcome["event"]["summary"] == "Planning"
        assert [e["recipient"] for e in outcome["emails_sent"]] == attendees
        assert all(e["subject"] == "Meeting Invite: Planning" for e in outcome["emails_sent"])

    @pytest.mark.asyncio
    async def test_invite_body(self) -> None:
        bodies: list[str] = []

        @tool(
            name="GMAIL_SEND_EMAIL",
            display_name="Send Email",
            description="Records bodies",
            fields=(string("to"), string("subject"), string("body"), string("user_google_email")),
        )
        def recording_send(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
            bodies.append(params["body"])
            return {"recipient": params["to"]}

        registry = _registry_with(recording_send, *calendar.TOOLS)
        agent = WorkspaceAgent(registry, Dispatcher(registry), user_id=USER)
        agent.initialize(["gmail", "googlecalendar"])

        await agent.schedule_meeting_with_invites(
            "Sync", "2025-01-15T10:00:00Z", "2025-01-15T10:30:00Z", ["a@example.com"]
        )

        (body,) = bodies
        assert 'You\'re invited to "Sync"' in body
        assert "Where: Online" in body
        assert "Agenda" not in body
        assert "2025-01-15 10:00" in body

    @pytest.mark.asyncio
    async def test_failed_invite_raises(self) -> None:
        @tool(
            name="GMAIL_SEND_EMAIL",
            display_name="Send Email",
            description="Rejects one recipient",
            fields=(string("to"), string("subject"), string("body"), string("user_google_email")),
        )
        def picky_send(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
            if params["to"] == "blocked@example.com":
                raise PermissionError("recipient blocked")
            return {"recipient": params["to"]}

        registry = _registry_with(picky_send, *calendar.TOOLS)
        agent = WorkspaceAgent(registry, Dispatcher(registry), user_id=USER)
        agent.initialize(["gmail", "googlecalendar"])

        with pytest.raises(ToolExecutionError) as exc:
            await agent.schedule_meeting_with_invites(
                "Sync",
                "2025-01-15T10:00:00Z",
                "2025-01-15T10:30:00Z",
                ["ok@example.com", "blocked@example.com"],
            )
        assert exc.value.result.error_message == "recipient blocked"

    @pytest.mark.asyncio
    async def test_daily_summary_counts(self) -> None:
        @tool(
            name="GMAIL_SEARCH_MESSAGES_FILTERS",
            display_name="Search",
            description="Canned inbox",
            fields=(string("query"), integer("max_results", default=10), string("user_google_email")),
        )
        def canned_search(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
            return {
                "messages": [
                    {"id": "1", "label_ids": ["INBOX", "IMPORTANT"]},
                    {"id": "2", "label_ids": ["INBOX"]},
                    {"id": "3"},
                ]
            }

        @tool(
            name="CALENDAR_LIST_EVENTS_FILTERS",
            display_name="List Events",
            description="Canned calendar",
            fields=(
                string("time_min", required=False),
                integer("max_results", default=10),
                string("user_google_email"),
            ),
        )
        def canned_events(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
            solo = {"attendees": [{"email": "me@example.com"}]}
            meeting = {"attendees": [{"email": "a@example.com"}, {"email": "b@example.com"}]}
            return {"events": [meeting, meeting, solo, solo, solo, solo]}

        registry = _registry_with(canned_search, canned_events)
        agent = WorkspaceAgent(registry, Dispatcher(registry), user_id=USER)
        agent.initialize(["gmail", "googlecalendar"])

        summary = await agent.generate_daily_summary("2025-01-15")

        assert summary.startswith("Daily Summary for 2025-01-15")
        assert "- Total emails: 3" in summary
        assert "- Important emails: 1" in summary
        assert "- Total events: 6" in summary
        assert "- Meetings: 2" in summary
        assert "- Meeting load: Heavy" in summary

    @pytest.mark.asyncio
    async def test_daily_summary_moderate_load(self, agent: WorkspaceAgent) -> None:
        summary = await agent.generate_daily_summary("2025-01-15")
        assert "- Total emails: 0" in summary
        assert "- Meeting load: Moderate" in summary

    @pytest.mark.asyncio
    async def test_daily_summary_never_raises(self) -> None:
        registry = _registry_with(*drive.TOOLS)
        agent = WorkspaceAgent(registry, Dispatcher(registry))
        agent.initialize()

        summary = await agent.generate_daily_summary("2025-01-15")

        assert summary.startswith("Failed to generate summary:")
        assert "Gmail not connected" in summary

    @pytest.mark.asyncio
    async def test_daily_summary_uses_day_query(self) -> None:
        seen: list[str] = []

        @tool(
            name="GMAIL_SEARCH_MESSAGES_FILTERS",
            display_name="Search",
            description="Records queries",
            fields=(string("query"), integer("max_results"), string("user_google_email")),
        )
        def recording_search(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
            seen.append(params["query"])
            return {"messages": []}

        registry = _registry_with(recording_search, *calendar.TOOLS)
        agent = WorkspaceAgent(registry, Dispatcher(registry))
        agent.initialize(["gmail", "googlecalendar"])

        await agent.generate_daily_summary("2025-01-15")

        assert seen == ["after:2025-01-15 before:2025-01-15"]
