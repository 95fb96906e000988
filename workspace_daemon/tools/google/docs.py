"""
Google Docs tools.

Generated object ids follow the Docs API convention of a kind prefix plus a
millisecond timestamp (`img_1712345678901`).
"""

from __future__ import annotations

from typing import Any

from ..base import ExecutionContext, tool
from ..schema import boolean, integer, list_of, nested, number, string
from ._common import now_iso, now_ms, user_email

_DOCUMENT_ID = string("document_id", "Google Docs document ID")


def _range(name: str, description: str, *, required: bool = True):
    return nested(
        name,
        (integer("start_index"), integer("end_index")),
        description,
        required=required,
    )


@tool(
    name="DOCS_GET_CONTENT_STRUCTURE",
    display_name="Get Document Content with Structure",
    description="Retrieves Google Docs content with structural elements and formatting",
    fields=(
        _DOCUMENT_ID,
        user_email(),
        boolean("include_suggestions", "Include suggestion mode content", default=False),
    ),
)
def get_content_structure(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    mode = "SUGGESTIONS_INLINE" if params["include_suggestions"] else "DEFAULT_FOR_CURRENT_ACCESS"
    return {
        "document_id": params["document_id"],
        "title": "",
        "body": {"content": []},
        "headers": {},
        "footers": {},
        "footnotes": {},
        "revision_id": "",
        "suggestions_view_mode": mode,
    }


@tool(
    name="DOCS_BATCH_UPDATE_CONTENT",
    display_name="Batch Update Document Content",
    description="Performs multiple content updates to a Google Docs document in a single request",
    fields=(
        _DOCUMENT_ID,
        user_email(),
        list_of(
            "requests",
            nested(
                "request",
                (
                    nested(
                        "insert_text",
                        (string("text"), nested("location", (integer("index"),))),
                        required=False,
                    ),
                    nested(
                        "delete_content_range",
                        (_range("range", "Range to delete"),),
                        required=False,
                    ),
                ),
            ),
            "List of update requests",
        ),
    ),
)
def batch_update_content(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "document_id": params["document_id"],
        "writes": len(params["requests"]),
        "revision_id": f"rev_{now_ms()}",
    }


@tool(
    name="DOCS_INSERT_IMAGE",
    display_name="Insert Image into Document",
    description="Inserts an image into a Google Docs document at specified location",
    fields=(
        _DOCUMENT_ID,
        user_email(),
        string("image_uri", "URI of the image to insert"),
        integer("insert_location", "Character index where to insert the image", minimum=0),
        number("width", "Image width in points", required=False),
        number("height", "Image height in points", required=False),
    ),
)
def insert_image(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "document_id": params["document_id"],
        "object_id": f"img_{now_ms()}",
        "insert_location": params["insert_location"],
        "image_uri": params["image_uri"],
    }


@tool(
    name="DOCS_CREATE_FROM_TEMPLATE",
    display_name="Create Document from Template",
    description="Creates a new Google Docs document from an existing template",
    fields=(
        string("template_id", "ID of the template document"),
        user_email(),
        string("title", "Title for the new document"),
        string("destination_folder_id", "Drive folder ID for the new document", required=False),
    ),
)
def create_from_template(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "document_id": f"doc_{now_ms()}",
        "title": params["title"],
        "template_id": params["template_id"],
        "created_time": now_iso(),
        "revision_id": "rev_1",
    }


@tool(
    name="DOCS_REPLACE_TEXT",
    display_name="Replace Text in Document",
    description="Replaces all instances of specified text in a Google Docs document",
    fields=(
        _DOCUMENT_ID,
        user_email(),
        string("find_text", "Text to find and replace"),
        string("replace_text", "Replacement text"),
        boolean("match_case", "Whether to match case", default=False),
    ),
)
def replace_text(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "document_id": params["document_id"],
        "occurrences_changed": 0,
        "find_text": params["find_text"],
        "replace_text": params["replace_text"],
    }


@tool(
    name="DOCS_GET_SUGGESTIONS",
    display_name="Get Document Suggestions",
    description="Retrieves all suggestions and comments from a Google Docs document",
    fields=(
        _DOCUMENT_ID,
        user_email(),
        boolean("include_resolved", "Include resolved suggestions", default=False),
    ),
)
def get_suggestions(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "document_id": params["document_id"],
        "suggestions": [],
        "comments": [],
        "total_count": 0,
    }


@tool(
    name="DOCS_APPLY_FORMATTING",
    display_name="Apply Document Formatting",
    description="Applies text formatting to specified ranges in a Google Docs document",
    fields=(
        _DOCUMENT_ID,
        user_email(),
        _range("range", "Text range to format"),
        nested(
            "text_style",
            (
                boolean("bold", required=False),
                boolean("italic", required=False),
                boolean("underline", required=False),
                number("font_size", required=False),
                string("font_family", required=False),
            ),
            "Text formatting options",
            required=False,
        ),
    ),
)
def apply_formatting(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "document_id": params["document_id"],
        "formatted_range": params["range"],
        "applied_styles": params.get("text_style", {}),
    }


@tool(
    name="DOCS_INSERT_TABLE",
    display_name="Insert Table into Document",
    description="Inserts a table with specified dimensions into a Google Docs document",
    fields=(
        _DOCUMENT_ID,
        user_email(),
        integer("insert_location", "Character index where to insert the table", minimum=0),
        integer("rows", "Number of table rows", minimum=1),
        integer("columns", "Number of table columns", minimum=1),
        list_of(
            "table_data",
            list_of("row", string("cell")),
            "Initial table data",
            required=False,
        ),
    ),
)
def insert_table(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "document_id": params["document_id"],
        "table_object_id": f"table_{now_ms()}",
        "insert_location": params["insert_location"],
        "rows": params["rows"],
        "columns": params["columns"],
    }


@tool(
    name="DOCS_GET_REVISION_HISTORY",
    display_name="Get Document Revision History",
    description="Retrieves the revision history of a Google Docs document",
    fields=(
        _DOCUMENT_ID,
        user_email(),
        integer("page_size", "Maximum number of revisions to return", default=25),
        string("page_token", "Token for pagination", required=False),
    ),
)
def get_revision_history(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "revisions": [],
        "next_page_token": None,
        "document_id": params["document_id"],
    }


@tool(
    name="DOCS_EXPORT_DOCUMENT",
    display_name="Export Document to Format",
    description="Exports a Google Docs document to various formats (PDF, DOCX, HTML, etc.)",
    fields=(
        _DOCUMENT_ID,
        user_email(),
        string("format", "Export format: pdf, docx, odt, rtf, txt, html, epub"),
        boolean("include_headers_footers", "Include headers and footers in export", default=True),
    ),
)
def export_document(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "document_id": params["document_id"],
        "format": params["format"],
        "export_url": "",
        "file_size": 0,
        "exported_time": now_iso(),
    }


@tool(
    name="DOCS_INSERT_PAGE_BREAK",
    display_name="Insert Page Break",
    description="Inserts a page break at specified location in a Google Docs document",
    fields=(
        _DOCUMENT_ID,
        user_email(),
        integer("insert_location", "Character index where to insert the page break", minimum=0),
    ),
)
def insert_page_break(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "document_id": params["document_id"],
        "page_break_object_id": f"pagebreak_{now_ms()}",
        "insert_location": params["insert_location"],
    }


@tool(
    name="DOCS_BATCH_GET_METADATA",
    display_name="Batch Get Document Metadata",
    description="Retrieves metadata for multiple Google Docs documents",
    fields=(
        list_of("document_ids", string("document_id"), "List of Google Docs document IDs"),
        user_email(),
        string("fields", "Comma-separated list of fields to include", default="*"),
    ),
)
def batch_get_metadata(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    documents = [
        {
            "document_id": document_id,
            "title": "",
            "revision_id": "",
            "created_time": "",
            "modified_time": "",
            "owners": [{"email_address": params["user_google_email"]}],
        }
        for document_id in params["document_ids"]
    ]
    return {"documents": documents, "count": len(documents)}


@tool(
    name="DOCS_CREATE_NAMED_RANGE",
    display_name="Create Named Range in Document",
    description="Creates a named range for easy reference to specific content in a Google Docs document",
    fields=(
        _DOCUMENT_ID,
        user_email(),
        string("name", "Name for the range"),
        _range("range", "Text range to name"),
    ),
)
def create_named_range(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "document_id": params["document_id"],
        "named_range_id": f"range_{now_ms()}",
        "name": params["name"],
        "range": params["range"],
    }


@tool(
    name="DOCS_GET_OUTLINE",
    display_name="Get Document Outline",
    description="Extracts the outline/table of contents from a Google Docs document",
    fields=(
        _DOCUMENT_ID,
        user_email(),
        integer(
            "max_heading_level",
            "Maximum heading level to include (1-6)",
            default=6,
            minimum=1,
            maximum=6,
        ),
    ),
)
def get_outline(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "document_id": params["document_id"],
        "outline": [],
        "heading_count": 0,
        "max_level": params["max_heading_level"],
    }


TOOLS = (
    get_content_structure,
    batch_update_content,
    insert_image,
    create_from_template,
    replace_text,
    get_suggestions,
    apply_formatting,
    insert_table,
    get_revision_history,
    export_document,
    insert_page_break,
    batch_get_metadata,
    create_named_range,
    get_outline,
)
