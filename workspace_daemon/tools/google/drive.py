"""
Google Drive tools.
"""

from __future__ import annotations

from typing import Any

from ..base import ExecutionContext, tool
from ..schema import boolean, integer, list_of, string
from ._common import now_iso, user_email

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


@tool(
    name="DRIVE_SEARCH_FILES_FILTERS",
    display_name="Search Drive Files with Filters",
    description="Advanced Google Drive file search with comprehensive filtering options",
    fields=(
        string("query", "Drive search query"),
        user_email(),
        string("spaces", "Search spaces: drive, appDataFolder, photos", default="drive"),
        string("corpus", "Search corpus: domain, user", default="user"),
        string(
            "order_by",
            "Sort order: createdTime, folder, modifiedByMeTime, modifiedTime, name, "
            "quotaBytesUsed, recency, sharedWithMeTime, starred, viewedByMeTime",
            default="modifiedTime desc",
        ),
        integer("page_size", "Maximum number of files to return", default=10),
        string("page_token", "Token for pagination", required=False),
        boolean("include_items_from_all_drives", "Include shared drive files", default=False),
    ),
)
def search_files_filters(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "files": [],
        "next_page_token": None,
        "incomplete_search": False,
        "kind": "drive#fileList",
    }


@tool(
    name="DRIVE_GET_FILE_CONTENT",
    display_name="Get Drive File Content",
    description="Downloads and retrieves the content of a Google Drive file",
    fields=(
        string("file_id", "Google Drive file ID"),
        user_email(),
        string("mime_type", "MIME type for export (for Google Workspace files)", required=False),
        boolean("acknowledge_abuse", "Acknowledge file might contain abuse", default=False),
    ),
)
def get_file_content(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "id": params["file_id"],
        "name": "",
        "mime_type": params.get("mime_type") or "application/octet-stream",
        "content": "",
        "size": 0,
        "download_url": "",
    }


@tool(
    name="DRIVE_UPLOAD_FILE",
    display_name="Upload File to Drive",
    description="Uploads a file to Google Drive with metadata",
    fields=(
        string("name", "Name of the file"),
        user_email(),
        string("content", "File content (base64 encoded for binary files)"),
        string("mime_type", "MIME type of the file", default="text/plain"),
        string("parent_folder_id", "Parent folder ID", required=False),
        string("description", "File description", required=False),
    ),
)
def upload_file(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    now = now_iso()
    return {
        "id": "file_placeholder",
        "name": params["name"],
        "mime_type": params["mime_type"],
        "size": len(params["content"]),
        "created_time": now,
        "modified_time": now,
        "web_view_link": "",
        "web_content_link": "",
    }


@tool(
    name="DRIVE_CREATE_FOLDER",
    display_name="Create Drive Folder",
    description="Creates a new folder in Google Drive",
    fields=(
        string("name", "Name of the folder"),
        user_email(),
        string("parent_folder_id", "Parent folder ID", required=False),
        string("description", "Folder description", required=False),
    ),
)
def create_folder(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    now = now_iso()
    return {
        "id": "folder_placeholder",
        "name": params["name"],
        "mime_type": FOLDER_MIME_TYPE,
        "created_time": now,
        "modified_time": now,
        "web_view_link": "",
    }


@tool(
    name="DRIVE_COPY_FILE",
    display_name="Copy Drive File",
    description="Creates a copy of an existing Google Drive file",
    fields=(
        string("file_id", "ID of the file to copy"),
        user_email(),
        string("name", "Name for the copied file", required=False),
        string("parent_folder_id", "Parent folder ID for the copy", required=False),
    ),
)
def copy_file(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    now = now_iso()
    return {
        "id": "copy_placeholder",
        "name": params.get("name") or "Copy of file",
        "original_file_id": params["file_id"],
        "created_time": now,
        "modified_time": now,
    }


@tool(
    name="DRIVE_BATCH_GET_METADATA",
    display_name="Batch Get Drive File Metadata",
    description="Retrieves metadata for multiple Google Drive files",
    fields=(
        list_of("file_ids", string("file_id"), "List of Google Drive file IDs"),
        user_email(),
        string("fields", "Comma-separated list of fields to include", default="*"),
    ),
)
def batch_get_metadata(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    owner = {"email_address": params["user_google_email"]}
    files = [
        {
            "id": file_id,
            "name": "",
            "mime_type": "",
            "size": 0,
            "created_time": "",
            "modified_time": "",
            "owners": [dict(owner)],
        }
        for file_id in params["file_ids"]
    ]
    return {"files": files, "count": len(files)}


TOOLS = (
    search_files_filters,
    get_file_content,
    upload_file,
    create_folder,
    copy_file,
    batch_get_metadata,
)
