"""
Shared fixtures: a tiny arithmetic tool, registries and a scripted planner.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Sequence

import pytest

from workspace_daemon.chat import ChatMessage
from workspace_daemon.planner import PlannerTurn
from workspace_daemon.tools import (
    ExecutionContext,
    Tool,
    ToolRegistry,
    build_registry,
    tool,
)
from workspace_daemon.tools.schema import number


@tool(
    name="ADD_NUMBERS",
    display_name="Add Numbers",
    description="Adds two numbers",
    fields=(number("a", "First addend"), number("b", "Second addend")),
)
def add_numbers(params: dict[str, Any], context: ExecutionContext) -> dict[str, Any]:
    return {"sum": params["a"] + params["b"]}


class FakePlanner:
    """Planner that replays scripted turns and records what it was asked."""

    def __init__(self, turns: Sequence[PlannerTurn] = ()) -> None:
        self._turns = list(turns)
        self.calls: list[dict[str, Any]] = []

    async def plan(
        self,
        system_prompt: str,
        conversation: Sequence[ChatMessage],
        tools: Sequence[Tool],
        max_tokens: int,
        temperature: float | None = None,
    ) -> PlannerTurn:
        self.calls.append({
            "system_prompt": system_prompt,
            "conversation": list(conversation),
            "tool_names": [t.name for t in tools],
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if not self._turns:
            return PlannerTurn(text="done", stop_reason="end_turn")
        return self._turns.pop(0)


@pytest.fixture
def adder() -> Tool:
    return add_numbers


@pytest.fixture
def adder_registry() -> ToolRegistry:
    registry = ToolRegistry()
    registry.register(add_numbers)
    return registry


@pytest.fixture(scope="session")
def catalogue() -> ToolRegistry:
    """The full Google Workspace catalogue (read-only, shared)."""
    return build_registry()


@pytest.fixture
def seeded_context() -> ExecutionContext:
    return ExecutionContext(user_id="tester@example.com", metadata=MappingProxyType({"seed": 7}))


@pytest.fixture
def planner_factory() -> type[FakePlanner]:
    return FakePlanner
