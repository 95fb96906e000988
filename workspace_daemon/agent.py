"""
Workspace agent: high-level workflows over direct tool dispatch.

Unlike the assistant, the agent never consults the planner. Each method maps
its arguments onto one catalogue tool, dispatches it, and returns the tool's
data or raises.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Sequence

from .errors import ServiceNotConnected
from .tools import (
    Dispatcher,
    ExecutionContext,
    InvocationRequest,
    ToolExecutionError,
    ToolRegistry,
)

logger = logging.getLogger("workspace.agent")

CAPABILITIES = (
    "Email Management",
    "Calendar Operations",
    "Document Processing",
    "Drive File Management",
    "Meeting Scheduling",
    "Task Automation",
)

# Service name -> tool slug prefix
SERVICE_PREFIXES: dict[str, str] = {
    "gmail": "GMAIL_",
    "googlecalendar": "CALENDAR_",
    "googledrive": "DRIVE_",
    "googledocs": "DOCS_",
    "googlesheets": "SHEETS_",
}

DEFAULT_SERVICES = ("gmail", "googlecalendar", "googledrive")


def _format_when(value: str) -> str:
    """Render an RFC3339 timestamp for humans; unparseable values pass through."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime("%Y-%m-%d %H:%M %Z").strip()


def _invite_body(
    title: str, start: str, end: str, location: str | None, agenda: str | None
) -> str:
    lines = [
        "Hi,",
        "",
        f'You\'re invited to "{title}"',
        "",
        f"When: {_format_when(start)} - {_format_when(end)}",
        f"Where: {location or 'Online'}",
        "",
    ]
    if agenda:
        lines += ["Agenda:", agenda, ""]
    lines += ["Please confirm your attendance.", "", "Best regards"]
    return "\n".join(lines)


def _render_summary(target: str, emails: dict[str, Any], events: dict[str, Any]) -> str:
    messages = emails.get("messages") or []
    items = events.get("events") or events.get("items") or []
    important = [m for m in messages if "IMPORTANT" in (m.get("label_ids") or [])]
    meetings = [e for e in items if len(e.get("attendees") or []) > 1]
    load = "Heavy" if len(items) > 5 else "Moderate"

    return "\n".join([
        f"Daily Summary for {target}",
        "",
        "EMAIL ACTIVITY:",
        f"- Total emails: {len(messages)}",
        f"- Important emails: {len(important)}",
        "",
        "CALENDAR EVENTS:",
        f"- Total events: {len(items)}",
        f"- Meetings: {len(meetings)}",
        "",
        "QUICK STATS:",
        "- Most active time: Based on email timestamps",
        f"- Meeting load: {load}",
        "- Action items: Email follow-ups needed",
        "",
        f"Generated at {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}",
    ])


class WorkspaceAgent:
    """
    Direct-dispatch workflows for one user.

    A service counts as connected once initialize() finds catalogue tools
    under its prefix.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        dispatcher: Dispatcher,
        user_id: str = "default",
        connected_account_id: str | None = None,
    ) -> None:
        self._registry = registry
        self._dispatcher = dispatcher
        self.user_id = user_id
        self._context = ExecutionContext(
            user_id=user_id, connected_account_id=connected_account_id
        )
        self._connected: list[str] = []

    @property
    def connected_services(self) -> tuple[str, ...]:
        return tuple(self._connected)

    def get_capabilities(self) -> list[str]:
        return list(CAPABILITIES)

    def initialize(self, services: Sequence[str] = DEFAULT_SERVICES) -> tuple[str, ...]:
        """Mark services connected when the registry has tools for them."""
        logger.info(f"Initializing workspace agent for user: {self.user_id}")
        for service in services:
            prefix = SERVICE_PREFIXES.get(service)
            if prefix is None:
                logger.warning(f"Unknown service '{service}', skipping")
                continue
            tools = self._registry.with_prefix(prefix)
            if tools:
                if service not in self._connected:
                    self._connected.append(service)
                logger.info(f"{service} ready ({len(tools)} tools available)")
            else:
                logger.warning(f"{service} not connected - no tools registered")
        logger.info(f"Agent initialized with {len(self._connected)} connected services")
        return self.connected_services

    def _require(self, service: str, label: str) -> None:
        if service not in self._connected:
            raise ServiceNotConnected(label)

    async def _run(self, slug: str, arguments: dict[str, Any]) -> dict[str, Any]:
        result = await self._dispatcher.dispatch(InvocationRequest(slug, arguments), self._context)
        if not result.succeeded:
            raise ToolExecutionError(result)
        return result.data

    # --- Gmail ---

    async def send_email(
        self,
        to: str,
        subject: str,
        body: str,
        cc: str | None = None,
        bcc: str | None = None,
    ) -> dict[str, Any]:
        self._require("gmail", "Gmail")
        logger.info(f'Sending email to {to}: "{subject}"')
        return await self._run("GMAIL_SEND_EMAIL", self._email_args(to, subject, body, cc, bcc))

    def _email_args(
        self, to: str, subject: str, body: str, cc: str | None = None, bcc: str | None = None
    ) -> dict[str, Any]:
        args: dict[str, Any] = {
            "to": to,
            "subject": subject,
            "body": body,
            "user_google_email": self.user_id,
        }
        if cc:
            args["cc"] = cc
        if bcc:
            args["bcc"] = bcc
        return args

    async def get_recent_emails(
        self, max_results: int = 10, query: str | None = None
    ) -> dict[str, Any]:
        self._require("gmail", "Gmail")
        logger.info(f"Fetching {max_results} recent emails")
        return await self._run(
            "GMAIL_SEARCH_MESSAGES_FILTERS",
            {
                "query": query or "in:inbox",
                "max_results": max_results,
                "user_google_email": self.user_id,
            },
        )

    # --- Calendar ---

    async def create_calendar_event(
        self,
        title: str,
        start: str,
        end: str,
        description: str | None = None,
        attendees: Sequence[str] | None = None,
        location: str | None = None,
    ) -> dict[str, Any]:
        self._require("googlecalendar", "Google Calendar")
        logger.info(f'Creating calendar event: "{title}"')
        args: dict[str, Any] = {
            "summary": title,
            "start_time": start,
            "end_time": end,
            "attendees": list(attendees or []),
            "user_google_email": self.user_id,
        }
        if description is not None:
            args["description"] = description
        if location is not None:
            args["location"] = location
        return await self._run("CALENDAR_CREATE_EVENT", args)

    async def get_upcoming_events(
        self, max_results: int = 10, time_min: str | None = None
    ) -> dict[str, Any]:
        self._require("googlecalendar", "Google Calendar")
        if time_min is None:
            time_min = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        logger.info(f"Fetching {max_results} upcoming events")
        return await self._run(
            "CALENDAR_LIST_EVENTS_FILTERS",
            {
                "max_results": max_results,
                "time_min": time_min,
                "single_events": True,
                "order_by": "startTime",
                "user_google_email": self.user_id,
            },
        )

    # --- Drive ---

    async def upload_to_drive(
        self, filename: str, content: str, parent_folder_id: str | None = None
    ) -> dict[str, Any]:
        self._require("googledrive", "Google Drive")
        logger.info(f'Uploading file to Drive: "{filename}"')
        args: dict[str, Any] = {
            "name": filename,
            "content": content,
            "user_google_email": self.user_id,
        }
        if parent_folder_id:
            args["parent_folder_id"] = parent_folder_id
        return await self._run("DRIVE_UPLOAD_FILE", args)

    async def search_drive_files(self, query: str, max_results: int = 10) -> dict[str, Any]:
        self._require("googledrive", "Google Drive")
        logger.info(f'Searching Drive files: "{query}"')
        return await self._run(
            "DRIVE_SEARCH_FILES_FILTERS",
            {"query": query, "page_size": max_results, "user_google_email": self.user_id},
        )

    # --- Workflows ---

    async def schedule_meeting_with_invites(
        self,
        title: str,
        start: str,
        end: str,
        attendees: Sequence[str],
        agenda: str | None = None,
        location: str | None = None,
    ) -> dict[str, Any]:
        """
        Create a calendar event, then email an invite to every attendee.

        Invites go out concurrently; `emails_sent` follows attendee order.

        Raises:
            ServiceNotConnected: if Calendar or Gmail is not connected
            ToolExecutionError: if the event or any invite failed
        """
        logger.info(f'Orchestrating meeting workflow: "{title}"')
        event = await self.create_calendar_event(
            title, start, end, description=agenda, attendees=attendees, location=location
        )

        self._require("gmail", "Gmail")
        subject = f"Meeting Invite: {title}"
        body = _invite_body(title, start, end, location, agenda)
        results = await self._dispatcher.dispatch_all(
            [
                InvocationRequest("GMAIL_SEND_EMAIL", self._email_args(attendee, subject, body))
                for attendee in attendees
            ],
            self._context,
        )
        for result in results:
            if not result.succeeded:
                raise ToolExecutionError(result)

        logger.info(f"Meeting workflow completed: event created, {len(results)} invites sent")
        return {"event": event, "emails_sent": [r.data for r in results]}

    async def generate_daily_summary(self, date: str | None = None) -> str:
        """Plain-text digest of a day's email and calendar activity. Never raises."""
        target = date or datetime.now(timezone.utc).date().isoformat()
        logger.info(f"Generating daily summary for {target}")

        try:
            emails = await self.get_recent_emails(50, f"after:{target} before:{target}")
            events = await self.get_upcoming_events(20, f"{target}T00:00:00Z")
            summary = _render_summary(target, emails, events)
        except Exception as e:
            logger.error(f"Failed to generate daily summary: {e}")
            return f"Failed to generate summary: {e}"

        logger.info("Daily summary generated")
        return summary

    def get_status(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "connected_services": list(self._connected),
            "capabilities": self.get_capabilities(),
            "ready": bool(self._connected),
        }
