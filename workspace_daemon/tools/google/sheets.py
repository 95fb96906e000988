"""
Google Sheets tools.
"""

from __future__ import annotations

from typing import Any

from ..base import ExecutionContext, tool
from ..schema import boolean, integer, list_of, string
from ._common import user_email

_SPREADSHEET_ID = string("spreadsheet_id", "The ID of the spreadsheet")


@tool(
    name="SHEETS_LIST_SPREADSHEETS",
    display_name="List Spreadsheets",
    description="Lists spreadsheets from Google Drive that the user has access to",
    fields=(
        user_email(),
        integer("max_results", "Maximum number of spreadsheets to return (default: 25)", default=25),
    ),
)
def list_spreadsheets(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {"spreadsheets": [], "count": 0, "user_email": params["user_google_email"]}


@tool(
    name="SHEETS_GET_SPREADSHEET_INFO",
    display_name="Get Spreadsheet Info",
    description="Gets information about a specific spreadsheet including its sheets",
    fields=(
        user_email(),
        string("spreadsheet_id", "The ID of the spreadsheet to get info for"),
    ),
)
def get_spreadsheet_info(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "title": "",
        "sheets": [],
        "spreadsheet_id": params["spreadsheet_id"],
        "user_email": params["user_google_email"],
    }


@tool(
    name="SHEETS_READ_SHEET_VALUES",
    display_name="Read Sheet Values",
    description="Reads values from a specific range in a Google Sheet",
    fields=(
        user_email(),
        _SPREADSHEET_ID,
        string(
            "range_name",
            'The range to read (e.g., "Sheet1!A1:D10") (default: "A1:Z1000")',
            default="A1:Z1000",
        ),
    ),
)
def read_sheet_values(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "values": [],
        "range": params["range_name"],
        "spreadsheet_id": params["spreadsheet_id"],
        "user_email": params["user_google_email"],
    }


@tool(
    name="SHEETS_MODIFY_SHEET_VALUES",
    display_name="Modify Sheet Values",
    description="Modifies values in a specific range of a Google Sheet - can write, update, or clear values",
    fields=(
        user_email(),
        _SPREADSHEET_ID,
        string("range_name", 'The range to modify (e.g., "Sheet1!A1:D10")'),
        list_of(
            "values",
            list_of("row", string("cell")),
            "2D array of values to write/update",
            required=False,
        ),
        string(
            "value_input_option",
            'How to interpret input values ("RAW" or "USER_ENTERED") (default: "USER_ENTERED")',
            default="USER_ENTERED",
        ),
        boolean(
            "clear_values",
            "If true, clears the range instead of writing values (default: false)",
            default=False,
        ),
    ),
)
def modify_sheet_values(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    clearing = params["clear_values"]
    values = [] if clearing else params.get("values", [])
    return {
        # Row count stands in for cell count until real API responses exist
        "updated_cells": len(values),
        "updated_rows": len(values),
        "updated_columns": len(values[0]) if values else 0,
        "range": params["range_name"],
        "operation": "clear" if clearing else "update",
        "spreadsheet_id": params["spreadsheet_id"],
    }


@tool(
    name="SHEETS_CREATE_SPREADSHEET",
    display_name="Create Spreadsheet",
    description="Creates a new Google Spreadsheet",
    fields=(
        user_email(),
        string("title", "The title of the new spreadsheet"),
        list_of(
            "sheet_names",
            string("sheet_name"),
            "List of sheet names to create (default: creates one sheet)",
            required=False,
        ),
    ),
)
def create_spreadsheet(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "spreadsheet_id": "",
        "spreadsheet_url": "",
        "title": params["title"],
        "sheet_names": params.get("sheet_names"),
        "user_email": params["user_google_email"],
    }


@tool(
    name="SHEETS_CREATE_SHEET",
    display_name="Create Sheet",
    description="Creates a new sheet within an existing spreadsheet",
    fields=(
        user_email(),
        _SPREADSHEET_ID,
        string("sheet_name", "The name of the new sheet"),
    ),
)
def create_sheet(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "sheet_id": "",
        "sheet_name": params["sheet_name"],
        "spreadsheet_id": params["spreadsheet_id"],
        "user_email": params["user_google_email"],
    }


TOOLS = (
    list_spreadsheets,
    get_spreadsheet_info,
    read_sheet_values,
    modify_sheet_values,
    create_spreadsheet,
    create_sheet,
)
