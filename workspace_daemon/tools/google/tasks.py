"""
Google Tasks tools.
"""

from __future__ import annotations

from typing import Any

from ..base import ExecutionContext, tool
from ..schema import boolean, enum, integer, string
from ._common import user_email


def _task_list_id(description: str):
    return string("task_list_id", description)


@tool(
    name="TASKS_LIST_TASK_LISTS",
    display_name="List Task Lists",
    description="List all task lists for the user",
    fields=(
        user_email(),
        string(
            "max_results",
            "Maximum number of task lists to return (default: 1000, max: 1000)",
            required=False,
        ),
        string("page_token", "Token for pagination", required=False),
    ),
)
def list_task_lists(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "task_lists": [],
        "next_page_token": params.get("page_token"),
        "total_count": 0,
        "user_email": params["user_google_email"],
    }


@tool(
    name="TASKS_GET_TASK_LIST",
    display_name="Get Task List",
    description="Get details of a specific task list",
    fields=(user_email(), _task_list_id("The ID of the task list to retrieve")),
)
def get_task_list(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "task_list_id": params["task_list_id"],
        "title": "",
        "updated": "",
        "self_link": "",
        "user_email": params["user_google_email"],
    }


@tool(
    name="TASKS_CREATE_TASK_LIST",
    display_name="Create Task List",
    description="Create a new task list",
    fields=(user_email(), string("title", "The title of the new task list")),
)
def create_task_list(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "task_list_id": "",
        "title": params["title"],
        "created": "",
        "self_link": "",
        "user_email": params["user_google_email"],
    }


@tool(
    name="TASKS_UPDATE_TASK_LIST",
    display_name="Update Task List",
    description="Update an existing task list",
    fields=(
        user_email(),
        _task_list_id("The ID of the task list to update"),
        string("title", "The new title for the task list"),
    ),
)
def update_task_list(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "task_list_id": params["task_list_id"],
        "title": params["title"],
        "updated": "",
        "user_email": params["user_google_email"],
    }


@tool(
    name="TASKS_DELETE_TASK_LIST",
    display_name="Delete Task List",
    description="Delete a task list. Note: This will also delete all tasks in the list",
    fields=(user_email(), _task_list_id("The ID of the task list to delete")),
)
def delete_task_list(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "task_list_id": params["task_list_id"],
        "deleted": True,
        "user_email": params["user_google_email"],
    }


@tool(
    name="TASKS_LIST_TASKS",
    display_name="List Tasks",
    description="List all tasks in a specific task list",
    fields=(
        user_email(),
        _task_list_id("The ID of the task list to retrieve tasks from"),
        integer(
            "max_results",
            "Maximum number of tasks to return (default: 20, max: 10000)",
            default=20,
            minimum=1,
            maximum=10000,
        ),
        string("page_token", "Token for pagination", required=False),
        boolean("show_completed", "Whether to include completed tasks (default: true)", default=True),
        boolean("show_deleted", "Whether to include deleted tasks (default: false)", default=False),
        boolean("show_hidden", "Whether to include hidden tasks (default: false)", default=False),
        boolean("show_assigned", "Whether to include assigned tasks (default: false)", default=False),
        string("completed_max", "Upper bound for completion date (RFC 3339 timestamp)", required=False),
        string("completed_min", "Lower bound for completion date (RFC 3339 timestamp)", required=False),
        string("due_max", "Upper bound for due date (RFC 3339 timestamp)", required=False),
        string("due_min", "Lower bound for due date (RFC 3339 timestamp)", required=False),
        string(
            "updated_min",
            "Lower bound for last modification time (RFC 3339 timestamp)",
            required=False,
        ),
    ),
)
def list_tasks(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "task_list_id": params["task_list_id"],
        "tasks": [],
        "next_page_token": params.get("page_token"),
        "total_count": 0,
        "user_email": params["user_google_email"],
    }


@tool(
    name="TASKS_GET_TASK",
    display_name="Get Task",
    description="Get details of a specific task",
    fields=(
        user_email(),
        _task_list_id("The ID of the task list containing the task"),
        string("task_id", "The ID of the task to retrieve"),
    ),
)
def get_task(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "task_list_id": params["task_list_id"],
        "task_id": params["task_id"],
        "title": "",
        "notes": "",
        "status": "",
        "due": "",
        "completed": "",
        "updated": "",
        "user_email": params["user_google_email"],
    }


@tool(
    name="TASKS_CREATE_TASK",
    display_name="Create Task",
    description="Create a new task in a task list",
    fields=(
        user_email(),
        _task_list_id("The ID of the task list to create the task in"),
        string("title", "The title of the new task"),
        string("notes", "Notes/description for the task", required=False),
        string("due", "Due date (RFC 3339 timestamp)", required=False),
        string("parent", "Parent task ID for subtasks", required=False),
        string("previous", "Previous sibling task ID for positioning", required=False),
    ),
)
def create_task(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "task_list_id": params["task_list_id"],
        "task_id": "",
        "title": params["title"],
        "notes": params.get("notes"),
        "due": params.get("due"),
        "parent": params.get("parent"),
        "status": "needsAction",
        "user_email": params["user_google_email"],
    }


@tool(
    name="TASKS_UPDATE_TASK",
    display_name="Update Task",
    description="Update an existing task",
    fields=(
        user_email(),
        _task_list_id("The ID of the task list containing the task"),
        string("task_id", "The ID of the task to update"),
        string("title", "The new title for the task", required=False),
        string("notes", "The new notes/description for the task", required=False),
        enum(
            "status",
            ("needsAction", "completed"),
            "The new status for the task",
            required=False,
        ),
        string("due", "The new due date (RFC 3339 timestamp)", required=False),
    ),
)
def update_task(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "task_list_id": params["task_list_id"],
        "task_id": params["task_id"],
        "title": params.get("title"),
        "notes": params.get("notes"),
        "status": params.get("status"),
        "due": params.get("due"),
        "updated": "",
        "user_email": params["user_google_email"],
    }


@tool(
    name="TASKS_DELETE_TASK",
    display_name="Delete Task",
    description="Delete a specific task",
    fields=(
        user_email(),
        _task_list_id("The ID of the task list containing the task"),
        string("task_id", "The ID of the task to delete"),
    ),
)
def delete_task(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "task_list_id": params["task_list_id"],
        "task_id": params["task_id"],
        "deleted": True,
        "user_email": params["user_google_email"],
    }


@tool(
    name="TASKS_MOVE_TASK",
    display_name="Move Task",
    description="Move a task to another position in the task list or to another parent",
    fields=(
        user_email(),
        _task_list_id("The ID of the task list containing the task"),
        string("task_id", "The ID of the task to move"),
        string("parent", "New parent task ID (for creating subtasks)", required=False),
        string("previous", "Previous sibling task ID for positioning", required=False),
    ),
)
def move_task(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "task_list_id": params["task_list_id"],
        "task_id": params["task_id"],
        "parent": params.get("parent"),
        "previous": params.get("previous"),
        "moved": True,
        "user_email": params["user_google_email"],
    }


@tool(
    name="TASKS_CLEAR_COMPLETED_TASKS",
    display_name="Clear Completed Tasks",
    description="Clear all completed tasks from a task list",
    fields=(
        user_email(),
        _task_list_id("The ID of the task list to clear completed tasks from"),
    ),
)
def clear_completed_tasks(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {
        "task_list_id": params["task_list_id"],
        "cleared_count": 0,
        "user_email": params["user_google_email"],
    }


TOOLS = (
    list_task_lists,
    get_task_list,
    create_task_list,
    update_task_list,
    delete_task_list,
    list_tasks,
    get_task,
    create_task,
    update_task,
    delete_task,
    move_task,
    clear_completed_tasks,
)
