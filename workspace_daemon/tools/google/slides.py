"""
Google Slides tools.
"""

from __future__ import annotations

from typing import Any

from ..base import ExecutionContext, tool
from ..schema import anything, list_of, string
from ._common import user_email


@tool(
    name="SLIDES_CREATE_PRESENTATION",
    display_name="Create Presentation",
    description="Create a new Google Slides presentation",
    fields=(
        user_email(),
        string(
            "title",
            'The title for the new presentation (default: "Untitled Presentation")',
            default="Untitled Presentation",
        ),
    ),
)
def create_presentation(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "presentation_id": "",
        "presentation_url": "",
        "title": params["title"],
        "slides_count": 1,
        "user_email": params["user_google_email"],
    }


@tool(
    name="SLIDES_GET_PRESENTATION",
    display_name="Get Presentation",
    description="Get details about a Google Slides presentation",
    fields=(
        user_email(),
        string("presentation_id", "The ID of the presentation to retrieve"),
    ),
)
def get_presentation(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "title": "",
        "presentation_id": params["presentation_id"],
        "slides": [],
        "page_size": {"width": 0, "height": 0, "unit": ""},
        "user_email": params["user_google_email"],
    }


@tool(
    name="SLIDES_BATCH_UPDATE_PRESENTATION",
    display_name="Batch Update Presentation",
    description="Apply batch updates to a Google Slides presentation",
    fields=(
        user_email(),
        string("presentation_id", "The ID of the presentation to update"),
        list_of("requests", anything("request"), "List of update requests to apply"),
    ),
)
def batch_update_presentation(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "presentation_id": params["presentation_id"],
        "requests_applied": len(params["requests"]),
        "replies": [],
        "user_email": params["user_google_email"],
    }


@tool(
    name="SLIDES_GET_PAGE",
    display_name="Get Page",
    description="Get details about a specific page (slide) in a presentation",
    fields=(
        user_email(),
        string("presentation_id", "The ID of the presentation"),
        string("page_object_id", "The object ID of the page/slide to retrieve"),
    ),
)
def get_page(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "presentation_id": params["presentation_id"],
        "page_id": params["page_object_id"],
        "page_type": "",
        "page_elements": [],
        "user_email": params["user_google_email"],
    }


@tool(
    name="SLIDES_GET_PAGE_THUMBNAIL",
    display_name="Get Page Thumbnail",
    description="Generate a thumbnail URL for a specific page (slide) in a presentation",
    fields=(
        user_email(),
        string("presentation_id", "The ID of the presentation"),
        string("page_object_id", "The object ID of the page/slide"),
        string(
            "thumbnail_size",
            'Size of thumbnail ("LARGE", "MEDIUM", "SMALL") (default: "MEDIUM")',
            default="MEDIUM",
        ),
    ),
)
def get_page_thumbnail(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "presentation_id": params["presentation_id"],
        "page_id": params["page_object_id"],
        "thumbnail_size": params["thumbnail_size"],
        "thumbnail_url": "",
        "user_email": params["user_google_email"],
    }


TOOLS = (
    create_presentation,
    get_presentation,
    batch_update_presentation,
    get_page,
    get_page_thumbnail,
)
