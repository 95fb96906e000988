"""
Gmail tools.

Executors return placeholder payloads shaped like Gmail API responses.
"""

from __future__ import annotations

from typing import Any

from ..base import ExecutionContext, tool
from ..schema import boolean, integer, list_of, nested, string
from ._common import now_ms, user_email

_SYSTEM_LABELS = ("INBOX", "SENT", "DRAFT", "IMPORTANT", "STARRED", "SPAM", "TRASH", "UNREAD")

_MESSAGE_IDS = list_of("message_ids", string("message_id"), "List of Gmail message IDs")


@tool(
    name="GMAIL_SEND_EMAIL",
    display_name="Send Gmail Email",
    description="Sends an email from the user's Gmail account",
    fields=(
        string("to", "Recipient email address"),
        string("subject", "Email subject"),
        string("body", "Email body content"),
        string("cc", "CC recipients", required=False),
        string("bcc", "BCC recipients", required=False),
        boolean("is_html", "Whether the body is HTML", default=False),
        user_email(),
    ),
)
def send_email(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    stamp = now_ms()
    return {
        "message_id": f"msg_{stamp}",
        "thread_id": f"thread_{stamp}",
        "status": "sent",
        "recipient": params["to"],
        "subject": params["subject"],
    }


@tool(
    name="GMAIL_GET_MESSAGES_CONTENT_BATCH",
    display_name="Get Gmail Messages Content Batch",
    description="Retrieves the full content (subject, body, attachments) of multiple Gmail messages by their IDs",
    fields=(
        list_of("message_ids", string("message_id"), "List of Gmail message IDs to retrieve"),
        user_email(),
        boolean("include_attachments", "Whether to include attachment information", default=False),
    ),
)
def get_messages_content_batch(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "messages": [],
        "count": len(params["message_ids"]),
        "user_email": params["user_google_email"],
    }


@tool(
    name="GMAIL_GET_THREADS_CONTENT_BATCH",
    display_name="Get Gmail Threads Content Batch",
    description="Retrieves the full content of multiple Gmail threads by their IDs",
    fields=(
        list_of("thread_ids", string("thread_id"), "List of Gmail thread IDs to retrieve"),
        user_email(),
        integer("max_results_per_thread", "Maximum messages per thread", default=50),
    ),
)
def get_threads_content_batch(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "threads": [],
        "count": len(params["thread_ids"]),
        "user_email": params["user_google_email"],
    }


@tool(
    name="GMAIL_DRAFT_MESSAGE",
    display_name="Draft Gmail Message",
    description="Creates a draft email in Gmail without sending it",
    fields=(
        string("to", "Recipient email address"),
        string("subject", "Email subject"),
        string("body", "Email body content"),
        string("cc", "CC recipients", required=False),
        string("bcc", "BCC recipients", required=False),
        user_email(),
    ),
)
def draft_message(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "draft_id": "draft_placeholder",
        "message": "Draft created successfully",
        "recipient": params["to"],
        "subject": params["subject"],
    }


@tool(
    name="GMAIL_BATCH_MODIFY_LABELS",
    display_name="Batch Modify Gmail Message Labels",
    description="Add or remove labels from multiple Gmail messages in a single operation",
    fields=(
        list_of("message_ids", string("message_id"), "List of Gmail message IDs to modify"),
        list_of("add_label_ids", string("label_id"), "Label IDs to add", default=()),
        list_of("remove_label_ids", string("label_id"), "Label IDs to remove", default=()),
        user_email(),
    ),
)
def batch_modify_labels(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "modified_count": len(params["message_ids"]),
        "message_ids": params["message_ids"],
        "labels_added": list(params["add_label_ids"]),
        "labels_removed": list(params["remove_label_ids"]),
    }


@tool(
    name="GMAIL_CREATE_LABEL",
    display_name="Create Gmail Label",
    description="Creates a new Gmail label with optional color and type settings",
    fields=(
        string("name", "Name of the label to create"),
        user_email(),
        string("label_list_visibility", "Visibility in label list", required=False),
        string("message_list_visibility", "Visibility in message list", required=False),
        nested(
            "color",
            (
                string("text_color", required=False),
                string("background_color", required=False),
            ),
            "Label color settings",
            required=False,
        ),
    ),
)
def create_label(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "id": "label_placeholder",
        "name": params["name"],
        "type": "user",
        "message_list_visibility": params.get("message_list_visibility") or "show",
        "label_list_visibility": params.get("label_list_visibility") or "labelShow",
    }


@tool(
    name="GMAIL_LIST_LABELS",
    display_name="List Gmail Labels",
    description="Lists the system and user labels of the user's mailbox",
    fields=(user_email(),),
)
def list_labels(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    labels = [{"id": name, "name": name, "type": "system"} for name in _SYSTEM_LABELS]
    return {"labels": labels, "count": len(labels)}


@tool(
    name="GMAIL_SEARCH_MESSAGES_FILTERS",
    display_name="Search Gmail Messages with Filters",
    description="Advanced Gmail search with comprehensive filtering options and pagination",
    fields=(
        string("query", "Gmail search query string"),
        user_email(),
        integer("max_results", "Maximum number of results to return", default=10),
        list_of("label_ids", string("label_id"), "Filter by specific label IDs", default=()),
        boolean("include_spam_trash", "Include spam and trash messages", default=False),
        string("page_token", "Token for pagination", required=False),
    ),
)
def search_messages_filters(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "messages": [],
        "next_page_token": None,
        "result_size_estimate": 0,
        "query": params["query"],
        "max_results": params["max_results"],
    }


@tool(
    name="GMAIL_GET_MESSAGE_RAW",
    display_name="Get Gmail Message Raw",
    description="Retrieves the raw RFC 2822 email content of a Gmail message",
    fields=(
        string("message_id", "Gmail message ID"),
        user_email(),
        string("format", "Format: raw, full, metadata, minimal", default="raw"),
    ),
)
def get_message_raw(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "id": params["message_id"],
        "raw": "",
        "size_estimate": 0,
        "format": params["format"],
    }


@tool(
    name="GMAIL_BATCH_DELETE_MESSAGES",
    display_name="Batch Delete Gmail Messages",
    description="Permanently delete multiple Gmail messages by their IDs",
    fields=(_MESSAGE_IDS, user_email()),
)
def batch_delete_messages(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "deleted_count": len(params["message_ids"]),
        "message_ids": params["message_ids"],
        "status": "success",
    }


@tool(
    name="GMAIL_GET_USER_PROFILE",
    display_name="Get Gmail User Profile",
    description="Retrieves the Gmail user profile information including storage quota",
    fields=(user_email(),),
)
def get_user_profile(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "email_address": params["user_google_email"],
        "messages_total": 0,
        "threads_total": 0,
        "history_id": "0",
    }


@tool(
    name="GMAIL_WATCH_MAILBOX",
    display_name="Watch Gmail Mailbox",
    description="Set up Gmail push notifications for mailbox changes",
    fields=(
        user_email(),
        string("topic_name", "Google Cloud Pub/Sub topic name"),
        list_of("label_ids", string("label_id"), "Label IDs to watch", default=()),
        string("label_filter_action", "include or exclude labels", default="include"),
    ),
)
def watch_mailbox(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    week_ms = 7 * 24 * 60 * 60 * 1000
    return {
        "history_id": "0",
        "expiration": now_ms() + week_ms,
        "topic_name": params["topic_name"],
    }


@tool(
    name="GMAIL_GET_ATTACHMENT",
    display_name="Get Gmail Attachment",
    description="Downloads a specific Gmail attachment by message ID and attachment ID",
    fields=(
        string("message_id", "Gmail message ID containing the attachment"),
        string("attachment_id", "Attachment ID to download"),
        user_email(),
    ),
)
def get_attachment(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "attachment_id": params["attachment_id"],
        "size": 0,
        "data": "",
        "filename": "attachment.bin",
    }


@tool(
    name="GMAIL_BATCH_ARCHIVE_MESSAGES",
    display_name="Batch Archive Gmail Messages",
    description="Archive multiple Gmail messages by removing INBOX label",
    fields=(_MESSAGE_IDS, user_email()),
)
def batch_archive_messages(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "archived_count": len(params["message_ids"]),
        "message_ids": params["message_ids"],
        "status": "archived",
    }


@tool(
    name="GMAIL_GET_HISTORY",
    display_name="Get Gmail History",
    description="Lists the history of changes to the user's mailbox",
    fields=(
        string("start_history_id", "Start history ID for retrieving changes"),
        user_email(),
        integer("max_results", "Maximum number of history records", default=100),
        string("label_id", "Filter by specific label ID", required=False),
        list_of(
            "history_types",
            string("history_type"),
            "Types of history: messageAdded, messageDeleted, labelAdded, labelRemoved",
            default=(),
        ),
    ),
)
def get_history(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "history": [],
        "next_page_token": None,
        "history_id": params["start_history_id"],
    }


@tool(
    name="GMAIL_STOP_WATCH",
    display_name="Stop Gmail Watch",
    description="Stops Gmail push notifications for the user's mailbox",
    fields=(user_email(),),
)
def stop_watch(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "status": "stopped",
        "user_email": params["user_google_email"],
        "timestamp": now_ms(),
    }


TOOLS = (
    send_email,
    get_messages_content_batch,
    get_threads_content_batch,
    draft_message,
    batch_modify_labels,
    create_label,
    list_labels,
    search_messages_filters,
    get_message_raw,
    batch_delete_messages,
    get_user_profile,
    watch_mailbox,
    get_attachment,
    batch_archive_messages,
    get_history,
    stop_watch,
)
