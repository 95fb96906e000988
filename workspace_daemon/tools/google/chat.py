"""
Google Chat tools.
"""

from __future__ import annotations

from typing import Any

from ..base import ExecutionContext, tool
from ..schema import integer, string
from ._common import user_email


@tool(
    name="CHAT_LIST_SPACES",
    display_name="List Spaces",
    description="Lists Google Chat spaces (rooms and direct messages) accessible to the user",
    fields=(
        user_email(),
        integer("page_size", "Maximum number of spaces to return (default: 100)", default=100),
        string(
            "space_type",
            'Type of spaces to list ("all", "room", "dm") (default: "all")',
            default="all",
        ),
    ),
)
def list_spaces(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "spaces": [],
        "space_type": params["space_type"],
        "total_count": 0,
        "user_email": params["user_google_email"],
    }


@tool(
    name="CHAT_GET_MESSAGES",
    display_name="Get Messages",
    description="Retrieves messages from a Google Chat space",
    fields=(
        user_email(),
        string("space_id", "The ID of the space to get messages from"),
        integer("page_size", "Maximum number of messages to return (default: 50)", default=50),
        string(
            "order_by",
            'Order of messages ("createTime desc" or "createTime asc") (default: "createTime desc")',
            default="createTime desc",
        ),
    ),
)
def get_messages(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "space_id": params["space_id"],
        "messages": [],
        "space_name": "",
        "total_count": 0,
        "user_email": params["user_google_email"],
    }


@tool(
    name="CHAT_SEND_MESSAGE",
    display_name="Send Message",
    description="Sends a message to a Google Chat space",
    fields=(
        user_email(),
        string("space_id", "The ID of the space to send message to"),
        string("message_text", "The text content of the message to send"),
        string("thread_key", "Thread key for threaded replies", required=False),
    ),
)
def send_message(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "space_id": params["space_id"],
        "message_id": "",
        "message_text": params["message_text"],
        "create_time": "",
        "thread_key": params.get("thread_key"),
        "user_email": params["user_google_email"],
    }


@tool(
    name="CHAT_SEARCH_MESSAGES",
    display_name="Search Messages",
    description="Searches for messages in Google Chat spaces by text content",
    fields=(
        user_email(),
        string("query", "The search query to match against message text"),
        string("space_id", "Optional space ID to limit search to specific space", required=False),
        integer("page_size", "Maximum number of messages to return (default: 25)", default=25),
    ),
)
def search_messages(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "query": params["query"],
        "space_id": params.get("space_id"),
        "messages": [],
        "total_count": 0,
        "user_email": params["user_google_email"],
    }


TOOLS = (list_spaces, get_messages, send_message, search_messages)
