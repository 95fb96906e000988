"""
Google Programmable Search tools.
"""

from __future__ import annotations

from typing import Any

from ..base import ExecutionContext, tool
from ..schema import enum, integer, list_of, string
from ._common import user_email

_SAFE = enum(
    "safe",
    ("active", "moderate", "off"),
    'Safe search level (default: "off")',
    default="off",
)


def _paging():
    return (
        integer(
            "num",
            "Number of results to return (1-10) (default: 10)",
            default=10,
            minimum=1,
            maximum=10,
        ),
        integer(
            "start",
            "The index of the first result to return (1-based) (default: 1)",
            default=1,
            minimum=1,
        ),
    )


@tool(
    name="SEARCH_CUSTOM",
    display_name="Search Custom",
    description="Performs a search using Google Custom Search JSON API",
    fields=(
        user_email(),
        string("q", "The search query"),
        *_paging(),
        _SAFE,
        enum("search_type", ("image",), 'Search for images if set to "image"', required=False),
        string("site_search", "Restrict search to a specific site/domain", required=False),
        enum(
            "site_search_filter",
            ("e", "i"),
            'Exclude ("e") or include ("i") site_search results',
            required=False,
        ),
        string(
            "date_restrict",
            'Restrict results by date (e.g., "d5" for past 5 days)',
            required=False,
        ),
        string("file_type", 'Filter by file type (e.g., "pdf", "doc")', required=False),
        string("language", 'Language code for results (e.g., "lang_en")', required=False),
        string("country", 'Country code for results (e.g., "countryUS")', required=False),
    ),
)
def search_custom(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "query": params["q"],
        "total_results": "0",
        "search_time": 0,
        "items": [],
        "next_start": params["start"] + params["num"],
        "user_email": params["user_google_email"],
    }


@tool(
    name="SEARCH_GET_SEARCH_ENGINE_INFO",
    display_name="Get Search Engine Info",
    description="Retrieves metadata about a Programmable Search Engine",
    fields=(user_email(),),
)
def get_search_engine_info(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "search_engine_id": "",
        "title": "",
        "facets": [],
        "user_email": params["user_google_email"],
    }


@tool(
    name="SEARCH_CUSTOM_SITERESTRICT",
    display_name="Search Custom Site Restrict",
    description="Performs a search restricted to specific sites using Google Custom Search",
    fields=(
        user_email(),
        string("q", "The search query"),
        list_of("sites", string("site"), "List of sites/domains to search within"),
        *_paging(),
        _SAFE,
    ),
)
def search_custom_siterestrict(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "query": params["q"],
        "sites": params["sites"],
        "total_results": "0",
        "search_time": 0,
        "items": [],
        "user_email": params["user_google_email"],
    }


TOOLS = (search_custom, get_search_engine_info, search_custom_siterestrict)
