"""
Comment tools for Docs, Sheets and Slides.

The three apps share one comment model, so each app's four tools (read,
create, reply, resolve) are built from the same factory, keyed on the app's
file id field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..base import ExecutionContext, Tool, tool
from ..schema import string
from ._common import now_iso, now_ms, user_email


@dataclass(frozen=True)
class _CommentTarget:
    prefix: str  # slug prefix, e.g. "DOCS"
    noun: str  # "Document"
    id_field: str  # "document_id"
    id_description: str


_TARGETS = (
    _CommentTarget("DOCS", "Document", "document_id", "The Google Docs document ID"),
    _CommentTarget("SHEETS", "Spreadsheet", "spreadsheet_id", "The Google Sheets spreadsheet ID"),
    _CommentTarget(
        "SLIDES", "Presentation", "presentation_id", "The Google Slides presentation ID"
    ),
)


def _comment_tools(target: _CommentTarget) -> tuple[Tool, ...]:
    file_id = target.id_field
    file_id_field = string(file_id, target.id_description)

    @tool(
        name=f"{target.prefix}_READ_COMMENTS",
        display_name=f"Read {target.noun} Comments",
        description=f"Read all comments from a Google {target.noun}",
        fields=(user_email(), file_id_field),
    )
    def read_comments(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
        return {
            "comments": [],
            file_id: params[file_id],
            "user_email": params["user_google_email"],
            "total_comments": 0,
        }

    @tool(
        name=f"{target.prefix}_CREATE_COMMENT",
        display_name=f"Create {target.noun} Comment",
        description=f"Create a new comment on a Google {target.noun}",
        fields=(
            user_email(),
            file_id_field,
            string("comment_content", "Content of the comment to create"),
        ),
    )
    def create_comment(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
        return {
            "comment_id": f"comment_{now_ms()}",
            file_id: params[file_id],
            "content": params["comment_content"],
            "user_email": params["user_google_email"],
            "created_time": now_iso(),
        }

    @tool(
        name=f"{target.prefix}_REPLY_COMMENT",
        display_name=f"Reply to {target.noun} Comment",
        description=f"Reply to a specific comment in a Google {target.noun}",
        fields=(
            user_email(),
            file_id_field,
            string("comment_id", "ID of the comment to reply to"),
            string("reply_content", "Content of the reply"),
        ),
    )
    def reply_comment(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
        return {
            "reply_id": f"reply_{now_ms()}",
            "comment_id": params["comment_id"],
            file_id: params[file_id],
            "content": params["reply_content"],
            "user_email": params["user_google_email"],
            "created_time": now_iso(),
        }

    @tool(
        name=f"{target.prefix}_RESOLVE_COMMENT",
        display_name=f"Resolve {target.noun} Comment",
        description=f"Resolve a comment in a Google {target.noun}",
        fields=(
            user_email(),
            file_id_field,
            string("comment_id", "ID of the comment to resolve"),
        ),
    )
    def resolve_comment(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
        return {
            "comment_id": params["comment_id"],
            file_id: params[file_id],
            "resolved": True,
            "user_email": params["user_google_email"],
            "resolved_time": now_iso(),
        }

    return (read_comments, create_comment, reply_comment, resolve_comment)


TOOLS = tuple(t for target in _TARGETS for t in _comment_tools(target))
