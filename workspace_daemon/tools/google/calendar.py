"""
Google Calendar tools.
"""

from __future__ import annotations

from typing import Any

from ..base import ExecutionContext, tool
from ..schema import boolean, integer, list_of, string
from ._common import now_iso, now_ms, user_email

_CALENDAR_ID = string("calendar_id", "Calendar ID (defaults to primary)", default="primary")


def _attendees(emails: list[str]) -> list[dict[str, str]]:
    return [{"email": email} for email in emails]


@tool(
    name="CALENDAR_CREATE_EVENT",
    display_name="Create Calendar Event",
    description="Creates a new Google Calendar event, optionally inviting attendees",
    fields=(
        user_email(),
        string("summary", "Event title/summary"),
        string("start_time", "Event start time (RFC3339)"),
        string("end_time", "Event end time (RFC3339)"),
        _CALENDAR_ID,
        string("description", "Event description", required=False),
        string("location", "Event location", required=False),
        list_of("attendees", string("email"), "List of attendee email addresses", default=()),
    ),
)
def create_event(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "id": f"event_{now_ms()}",
        "calendar_id": params["calendar_id"],
        "summary": params["summary"],
        "description": params.get("description", ""),
        "start": {"dateTime": params["start_time"]},
        "end": {"dateTime": params["end_time"]},
        "location": params.get("location", ""),
        "attendees": _attendees(params["attendees"]),
        "creator": {"email": params["user_google_email"]},
        "status": "confirmed",
        "html_link": "",
        "created": now_iso(),
    }


@tool(
    name="CALENDAR_LIST_EVENTS_FILTERS",
    display_name="List Calendar Events with Filters",
    description="Lists Google Calendar events with advanced filtering and pagination options",
    fields=(
        user_email(),
        _CALENDAR_ID,
        string("time_min", "Lower bound for event start time (RFC3339)", required=False),
        string("time_max", "Upper bound for event start time (RFC3339)", required=False),
        integer("max_results", "Maximum number of events to return", default=10),
        boolean("single_events", "Whether to expand recurring events", default=True),
        string("order_by", "Sort order: startTime or updated", default="startTime"),
        string("page_token", "Token for pagination", required=False),
    ),
)
def list_events_filters(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "events": [],
        "next_page_token": None,
        "summary": f"Calendar for {params['user_google_email']}",
        "time_zone": "UTC",
        "updated": now_iso(),
    }


@tool(
    name="CALENDAR_GET_EVENT",
    display_name="Get Calendar Event Details",
    description="Retrieves detailed information about a specific Calendar event",
    fields=(
        string("event_id", "Calendar event ID"),
        user_email(),
        _CALENDAR_ID,
    ),
)
def get_event(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "id": params["event_id"],
        "summary": "",
        "description": "",
        "start": {"dateTime": ""},
        "end": {"dateTime": ""},
        "location": "",
        "attendees": [],
        "creator": {"email": params["user_google_email"]},
    }


@tool(
    name="CALENDAR_UPDATE_EVENT",
    display_name="Update Calendar Event",
    description="Updates an existing Google Calendar event with new details",
    fields=(
        string("event_id", "Calendar event ID to update"),
        user_email(),
        _CALENDAR_ID,
        string("summary", "Event title/summary", required=False),
        string("description", "Event description", required=False),
        string("start_time", "Event start time (RFC3339)", required=False),
        string("end_time", "Event end time (RFC3339)", required=False),
        string("location", "Event location", required=False),
        list_of("attendees", string("email"), "List of attendee email addresses", default=()),
    ),
)
def update_event(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "id": params["event_id"],
        "summary": params.get("summary", ""),
        "description": params.get("description", ""),
        "start": {"dateTime": params.get("start_time", "")},
        "end": {"dateTime": params.get("end_time", "")},
        "location": params.get("location", ""),
        "attendees": _attendees(params["attendees"]),
        "updated": now_iso(),
    }


@tool(
    name="CALENDAR_DELETE_EVENT",
    display_name="Delete Calendar Event",
    description="Deletes a Google Calendar event permanently",
    fields=(
        string("event_id", "Calendar event ID to delete"),
        user_email(),
        _CALENDAR_ID,
        string(
            "send_updates",
            "Whether to send updates to attendees: all, externalOnly, none",
            default="all",
        ),
    ),
)
def delete_event(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "deleted": True,
        "event_id": params["event_id"],
        "calendar_id": params["calendar_id"],
        "send_updates": params["send_updates"],
    }


@tool(
    name="CALENDAR_LIST_CALENDARS",
    display_name="List User Calendars",
    description="Lists all calendars accessible by the user",
    fields=(
        user_email(),
        string(
            "min_access_role",
            "Minimum access level: freeBusyReader, owner, reader, writer",
            default="reader",
        ),
        boolean("show_deleted", "Whether to include deleted calendars", default=False),
        boolean("show_hidden", "Whether to include hidden calendars", default=False),
    ),
)
def list_calendars(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "calendars": [
            {
                "id": "primary",
                "summary": params["user_google_email"],
                "primary": True,
                "access_role": "owner",
            }
        ],
        "next_page_token": None,
    }


TOOLS = (
    create_event,
    list_events_filters,
    get_event,
    update_event,
    delete_event,
    list_calendars,
)
