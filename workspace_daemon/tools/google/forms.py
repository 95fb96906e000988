"""
Google Forms tools.
"""

from __future__ import annotations

from typing import Any

from ..base import ExecutionContext, tool
from ..schema import boolean, integer, string
from ._common import user_email


@tool(
    name="FORMS_CREATE_FORM",
    display_name="Create Form",
    description="Create a new form using the title given in the provided form message in the request",
    fields=(
        user_email(),
        string("title", "The title of the form"),
        string("description", "The description of the form", required=False),
        string("document_title", "The document title (shown in browser tab)", required=False),
    ),
)
def create_form(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "form_id": "",
        "edit_url": "",
        "responder_url": "",
        "title": params["title"],
        "description": params.get("description"),
        "document_title": params.get("document_title"),
        "user_email": params["user_google_email"],
    }


@tool(
    name="FORMS_GET_FORM",
    display_name="Get Form",
    description="Get a form",
    fields=(
        user_email(),
        string("form_id", "The ID of the form to retrieve"),
    ),
)
def get_form(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "form_id": params["form_id"],
        "title": "",
        "description": "",
        "document_title": "",
        "edit_url": "",
        "responder_url": "",
        "items": [],
        "user_email": params["user_google_email"],
    }


@tool(
    name="FORMS_SET_PUBLISH_SETTINGS",
    display_name="Set Publish Settings",
    description="Updates the publish settings of a form",
    fields=(
        user_email(),
        string("form_id", "The ID of the form to update publish settings for"),
        boolean(
            "publish_as_template",
            "Whether to publish as a template (default: false)",
            default=False,
        ),
        boolean(
            "require_authentication",
            "Whether to require authentication to view/submit (default: false)",
            default=False,
        ),
    ),
)
def set_publish_settings(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "form_id": params["form_id"],
        "publish_as_template": params["publish_as_template"],
        "require_authentication": params["require_authentication"],
        "user_email": params["user_google_email"],
    }


@tool(
    name="FORMS_GET_FORM_RESPONSE",
    display_name="Get Form Response",
    description="Get one response from the form",
    fields=(
        user_email(),
        string("form_id", "The ID of the form"),
        string("response_id", "The ID of the response to retrieve"),
    ),
)
def get_form_response(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "form_id": params["form_id"],
        "response_id": params["response_id"],
        "create_time": "",
        "last_submitted_time": "",
        "answers": {},
        "user_email": params["user_google_email"],
    }


@tool(
    name="FORMS_LIST_FORM_RESPONSES",
    display_name="List Form Responses",
    description="List a form's responses",
    fields=(
        user_email(),
        string("form_id", "The ID of the form"),
        integer("page_size", "Maximum number of responses to return (default: 10)", default=10),
        string("page_token", "Token for retrieving next page of results", required=False),
    ),
)
def list_form_responses(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "form_id": params["form_id"],
        "responses": [],
        "next_page_token": params.get("page_token"),
        "total_count": 0,
        "user_email": params["user_google_email"],
    }


TOOLS = (
    create_form,
    get_form,
    set_publish_settings,
    get_form_response,
    list_form_responses,
)
