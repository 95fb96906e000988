"""
Workspace workflow automation tool.

Runs a declared multi-app workflow. Steps are simulated: each action reports
completion with a random execution time.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from ..base import ExecutionContext, tool
from ..schema import enum, list_of, nested, string
from ..google._common import now_ms
from ._common import rng_for


@tool(
    name="WORKSPACE_WORKFLOW",
    display_name="Google Workspace Workflow Automation",
    description="Create and execute automated workflows across Google Workspace apps",
    fields=(
        enum(
            "workflow_type",
            ("email_to_calendar", "drive_to_sheets", "calendar_to_email"),
            "Kind of workflow",
        ),
        nested(
            "trigger",
            (
                enum("type", ("schedule", "email", "file_change", "calendar_event")),
                nested("conditions", description="Trigger conditions"),
            ),
            "What starts the workflow",
        ),
        list_of(
            "actions",
            nested(
                "action",
                (
                    enum("app", ("gmail", "calendar", "drive", "sheets")),
                    string("action"),
                    nested("parameters"),
                ),
            ),
            "Steps to run in order",
        ),
    ),
)
def workspace_workflow(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    rng = rng_for(context)
    actions = params["actions"]

    steps = [
        {
            "step": index,
            "app": action["app"],
            "action": action["action"],
            "status": "completed",
            "execution_time": rng.randint(200, 2199),
            "result": f"{action['app']} {action['action']} executed successfully",
        }
        for index, action in enumerate(actions, start=1)
    ]

    if params["trigger"]["type"] == "schedule":
        next_execution = (datetime.now(timezone.utc) + timedelta(hours=24)).isoformat()
    else:
        next_execution = "on_demand"

    return {
        "workflow_id": f"wf_{now_ms()}",
        "workflow_type": params["workflow_type"],
        "execution_summary": {
            "total_steps": len(actions),
            "completed_steps": len(actions),
            "failed_steps": 0,
            "total_execution_time": sum(s["execution_time"] for s in steps),
        },
        "step_results": steps,
        "next_execution": next_execution,
        "logs": [
            "Workflow initiated successfully",
            "All authentication checks passed",
            "Cross-app permissions verified",
            "Execution completed without errors",
        ],
    }


TOOL = workspace_workflow
