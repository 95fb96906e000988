"""
Base types for the tool system.

Each tool is declared with the `@tool` decorator, which bundles the spec
(slug, display name, description, input fields) with the executor. Service
modules collect their tools into a `TOOLS` tuple; single-tool modules export
`TOOL`.

This architecture enables:
- One descriptor drives validation, direct HTTP invocation and LLM tool use
- Profile composition: profiles name tool slugs, they don't define tools
- Clean separation: spec and implementation co-located in one module
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Coroutine, Mapping

from .schema import Field, to_json_schema


@dataclass(frozen=True)
class ExecutionContext:
    """
    Caller identity and connection handle passed to every executor.

    The tool core never inspects it; executors may read `user_id` or
    `metadata` (e.g. a random seed).
    """

    user_id: str = "default"
    connected_account_id: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


# Executors take the validated params and the context, sync or async
ToolFunction = Callable[
    [dict[str, Any], ExecutionContext],
    dict[str, Any] | Coroutine[Any, Any, dict[str, Any]],
]


@dataclass(frozen=True)
class ToolSpec:
    """
    Immutable tool specification (schema only).

    This is what gets sent to the LLM for function calling.
    """

    name: str
    display_name: str
    description: str
    fields: tuple[Field, ...] = ()

    @property
    def parameters(self) -> dict[str, Any]:
        """Input fields rendered as JSON Schema."""
        return to_json_schema(self.fields)

    def to_schema(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "display_name": self.display_name,
            "description": self.description,
            "parameters": self.parameters,
        }


@dataclass(frozen=True)
class Tool:
    """
    Complete tool definition: spec + executor.

    The registry collects these and makes them available for:
    - LLM function calling (via spec)
    - Direct API invocation (via the dispatcher)
    """

    spec: ToolSpec
    execute: ToolFunction

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def display_name(self) -> str:
        return self.spec.display_name

    @property
    def description(self) -> str:
        return self.spec.description

    @property
    def fields(self) -> tuple[Field, ...]:
        return self.spec.fields

    @property
    def parameters(self) -> dict[str, Any]:
        return self.spec.parameters

    def to_schema(self) -> dict[str, Any]:
        return self.spec.to_schema()


def tool(
    name: str,
    display_name: str,
    description: str,
    fields: tuple[Field, ...] = (),
) -> Callable[[ToolFunction], Tool]:
    """
    Decorator to create a Tool from an executor function.

    Usage:
        @tool(
            name="GMAIL_GET_USER_PROFILE",
            display_name="Get User Profile",
            description="Get Gmail profile information",
            fields=(string("user_google_email", "User's Google email"),),
        )
        def get_user_profile(params, context):
            return {"email_address": params["user_google_email"]}
    """

    def decorator(fn: ToolFunction) -> Tool:
        spec = ToolSpec(
            name=name, display_name=display_name, description=description, fields=fields
        )
        return Tool(spec=spec, execute=fn)

    return decorator
