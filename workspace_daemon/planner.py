"""
Planner: the LLM that decides which tools to call.

The chat loop depends only on the Planner protocol. AnthropicPlanner
implements it with the Anthropic Messages API and native tool use:
- tool specs are sent as `tools` with JSON Schema `input_schema`
- `tool_use` content blocks become ToolCalls
- tool results go back as `tool_result` blocks keyed by `tool_use_id`
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from anthropic import AsyncAnthropic

from .chat import ChatMessage, ToolCall
from .tools import Tool

logger = logging.getLogger("workspace.planner")

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"


@dataclass(frozen=True)
class PlannerTurn:
    """One planner response: text plus any requested tool calls."""

    text: str
    tool_calls: tuple[ToolCall, ...] = ()
    stop_reason: str | None = None


class Planner(Protocol):
    async def plan(
        self,
        system_prompt: str,
        conversation: Sequence[ChatMessage],
        tools: Sequence[Tool],
        max_tokens: int,
        temperature: float | None = None,
    ) -> PlannerTurn: ...


# --- Anthropic wire format (pure functions) ---


def to_anthropic_tools(tools: Sequence[Tool]) -> list[dict[str, Any]]:
    return [
        {"name": t.name, "description": t.description, "input_schema": t.parameters}
        for t in tools
    ]


def to_anthropic_messages(conversation: Sequence[ChatMessage]) -> list[dict[str, Any]]:
    """Convert conversation turns to Messages API format."""
    messages: list[dict[str, Any]] = []
    for msg in conversation:
        if msg.tool_results:
            blocks = [
                {
                    "type": "tool_result",
                    "tool_use_id": r.call_id,
                    "content": json.dumps(r.result.to_dict(), default=str),
                    "is_error": not r.result.succeeded,
                }
                for r in msg.tool_results
            ]
            messages.append({"role": msg.role, "content": blocks})
        elif msg.tool_calls:
            blocks = [{"type": "text", "text": msg.content}] if msg.content else []
            blocks.extend(
                {"type": "tool_use", "id": tc.id, "name": tc.name, "input": tc.arguments}
                for tc in msg.tool_calls
            )
            messages.append({"role": msg.role, "content": blocks})
        else:
            messages.append({"role": msg.role, "content": msg.content})
    return messages


def parse_response(response: Any) -> PlannerTurn:
    """Extract text and tool calls from a Messages API response."""
    texts: list[str] = []
    calls: list[ToolCall] = []
    for block in response.content:
        kind = getattr(block, "type", None)
        if kind == "text":
            texts.append(block.text)
        elif kind == "tool_use":
            calls.append(ToolCall(name=block.name, arguments=dict(block.input or {}), id=block.id))
    return PlannerTurn(
        text="".join(texts).strip(),
        tool_calls=tuple(calls),
        stop_reason=getattr(response, "stop_reason", None),
    )


# --- Anthropic Planner ---


class AnthropicPlanner:
    """
    Planner backed by Claude.

    Pass `client` to share or fake the SDK client; otherwise one is created
    from `api_key` (or ANTHROPIC_API_KEY).
    """

    def __init__(
        self,
        client: AsyncAnthropic | None = None,
        model: str | None = None,
        api_key: str | None = None,
    ) -> None:
        self._client = client or AsyncAnthropic(api_key=api_key)
        self.model = model or os.environ.get("ANTHROPIC_MODEL", DEFAULT_MODEL)

    async def plan(
        self,
        system_prompt: str,
        conversation: Sequence[ChatMessage],
        tools: Sequence[Tool],
        max_tokens: int,
        temperature: float | None = None,
    ) -> PlannerTurn:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "system": system_prompt,
            "messages": to_anthropic_messages(conversation),
            "max_tokens": max_tokens,
        }
        if tools:
            kwargs["tools"] = to_anthropic_tools(tools)
        if temperature is not None:
            kwargs["temperature"] = temperature

        response = await self._client.messages.create(**kwargs)
        turn = parse_response(response)
        logger.info(
            f"Planner response: stop_reason={turn.stop_reason}, tool_calls={len(turn.tool_calls)}"
        )
        return turn
