"""
Chat service: multi-round tool calling driven by a planner.

Architecture:
- ChatService: orchestrates conversation flow with tool execution
- A Planner (planner.py) decides which tools to call each round
- Tool calls of one round run concurrently through Dispatcher.dispatch_all
- Profiles supply the system prompt, tool selection and limits
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Sequence

from .profiles import get_profile
from .tools import (
    Dispatcher,
    ExecutionContext,
    InvocationRequest,
    InvocationResult,
    ToolRegistry,
)

if TYPE_CHECKING:
    from .planner import Planner

logger = logging.getLogger("workspace.chat")

EventCallback = Callable[[dict[str, Any]], Awaitable[None]]


# --- Message Types ---


@dataclass(frozen=True)
class ToolCall:
    """Tool call requested by the planner. `id` is the planner's tool-use id."""

    name: str
    arguments: dict[str, Any]
    id: str | None = None


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool call, correlated by `call_id`."""

    tool_name: str
    result: InvocationResult
    call_id: str | None = None


@dataclass(frozen=True)
class ChatMessage:
    """
    Immutable conversation turn.

    Assistant turns may carry the tool calls they requested; the user turn
    that follows carries the matching tool results.
    """

    role: str  # "user", "assistant"
    content: str
    tool_calls: tuple[ToolCall, ...] = ()
    tool_results: tuple[ToolResult, ...] = ()


@dataclass(frozen=True)
class ChatResponse:
    """Complete response from chat service."""

    content: str
    tool_calls: tuple[ToolCall, ...]
    tool_results: tuple[ToolResult, ...]
    rounds_used: int
    finished: bool


# --- Chat Service ---


class ChatService:
    """
    Orchestrates chat conversations with tool execution.

    Features:
    - Profile-based configuration
    - Explicit tool restriction per call (used by the workspace assistant)
    - Multi-round tool execution loop with concurrent calls per round
    - Progress events for streaming clients
    """

    def __init__(
        self,
        planner: Planner,
        registry: ToolRegistry,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self._planner = planner
        self._registry = registry
        self._dispatcher = dispatcher or Dispatcher(registry)

    async def chat(
        self,
        user_message: str,
        profile_name: str = "workspace",
        conversation_history: Sequence[ChatMessage] | None = None,
        context: ExecutionContext | None = None,
        tool_names: Sequence[str] | None = None,
        max_rounds: int | None = None,
        on_event: EventCallback | None = None,
    ) -> ChatResponse:
        """
        Process a chat message with the specified profile.

        `tool_names` overrides the profile's tool selection.

        Raises:
            UnknownIdentifier: if `tool_names` names an unregistered tool
        """
        profile = get_profile(profile_name)
        if profile is None:
            return ChatResponse(
                content=f"Unknown profile: {profile_name}",
                tool_calls=(),
                tool_results=(),
                rounds_used=0,
                finished=True,
            )

        if tool_names is not None:
            tools = self._registry.resolve(tool_names)
        else:
            tools = profile.select_tools(self._registry)
        allowed = {t.name for t in tools}
        rounds = profile.max_tool_rounds if max_rounds is None else max_rounds

        async def emit(event: dict[str, Any]) -> None:
            if on_event is not None:
                await on_event(event)

        conversation: list[ChatMessage] = list(conversation_history or [])
        conversation.append(ChatMessage("user", user_message))

        all_tool_calls: list[ToolCall] = []
        all_tool_results: list[ToolResult] = []
        text = ""

        for round_num in range(rounds):
            await emit({"type": "round_start", "round": round_num + 1, "max_rounds": rounds})

            turn = await self._planner.plan(
                profile.system_prompt,
                conversation,
                tools,
                profile.max_tokens,
                temperature=profile.temperature,
            )
            text = turn.text

            if not turn.tool_calls:
                logger.debug(f"Round {round_num + 1}: final answer ({turn.stop_reason})")
                return ChatResponse(
                    content=text,
                    tool_calls=tuple(all_tool_calls),
                    tool_results=tuple(all_tool_results),
                    rounds_used=round_num + 1,
                    finished=True,
                )

            logger.info(
                f"Round {round_num + 1}: {len(turn.tool_calls)} tool call(s): "
                f"{', '.join(tc.name for tc in turn.tool_calls)}"
            )
            for tc in turn.tool_calls:
                await emit({
                    "type": "tool_start",
                    "tool_name": tc.name,
                    "tool_args": _truncate_args(tc.arguments),
                    "call_id": tc.id,
                    "round": round_num + 1,
                    "max_rounds": rounds,
                })

            results = await self._run_calls(turn.tool_calls, allowed, context)
            round_results = [
                ToolResult(tc.name, result, tc.id) for tc, result in zip(turn.tool_calls, results)
            ]

            for tr in round_results:
                await emit({
                    "type": "tool_end",
                    "tool_name": tr.tool_name,
                    "succeeded": tr.result.succeeded,
                    "tool_result": _truncate_result(tr.result),
                    "call_id": tr.call_id,
                    "round": round_num + 1,
                    "max_rounds": rounds,
                })

            all_tool_calls.extend(turn.tool_calls)
            all_tool_results.extend(round_results)
            conversation.append(ChatMessage("assistant", text, tool_calls=tuple(turn.tool_calls)))
            conversation.append(ChatMessage("user", "", tool_results=tuple(round_results)))

        logger.warning(f"Hit max rounds ({rounds}) without a final answer")
        return ChatResponse(
            content=text,
            tool_calls=tuple(all_tool_calls),
            tool_results=tuple(all_tool_results),
            rounds_used=rounds,
            finished=False,
        )

    async def _run_calls(
        self,
        calls: Sequence[ToolCall],
        allowed: set[str],
        context: ExecutionContext | None,
    ) -> list[InvocationResult]:
        """Dispatch a round of calls; calls outside the offered tools fail in-band."""
        permitted = [tc for tc in calls if tc.name in allowed]
        dispatched = iter(
            await self._dispatcher.dispatch_all(
                [InvocationRequest(tc.name, tc.arguments, tc.id) for tc in permitted],
                context,
            )
        )

        results: list[InvocationResult] = []
        for tc in calls:
            if tc.name in allowed:
                results.append(next(dispatched))
            else:
                logger.warning(f"Planner called tool outside its tool set: {tc.name}")
                results.append(
                    InvocationResult.fail(
                        tc.name,
                        f"tool not available in this conversation: {tc.name}",
                        "UnknownIdentifier",
                        tc.id,
                    )
                )
        return results


def _truncate_args(args: dict[str, Any], max_len: int = 200) -> dict[str, Any]:
    """Truncate large argument values for event streaming."""
    truncated: dict[str, Any] = {}
    for key, value in args.items():
        if isinstance(value, str) and len(value) > max_len:
            truncated[key] = value[:max_len] + "..."
        else:
            truncated[key] = value
    return truncated


def _truncate_result(result: InvocationResult, max_len: int = 500) -> str:
    """Serialize and truncate a tool result for event streaming."""
    text = json.dumps(result.to_dict(), default=str)
    if len(text) > max_len:
        return text[:max_len] + "..."
    return text
