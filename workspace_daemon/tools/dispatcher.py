"""
Dispatcher: validates input and runs tool executors.

Every failure after startup is reported in-band as a failed InvocationResult,
so one bad call in a batch never aborts its siblings.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Sequence

from .base import ExecutionContext, Tool
from .errors import UnknownIdentifier, ValidationError
from .registry import ToolRegistry
from .schema import validate_input

logger = logging.getLogger("workspace.tools")


@dataclass(frozen=True)
class InvocationRequest:
    """A request to run one tool. `call_id` correlates with a planner tool-use id."""

    identifier: str
    raw_input: Mapping[str, Any] = field(default_factory=dict)
    call_id: str | None = None


@dataclass(frozen=True)
class InvocationResult:
    """
    Uniform outcome envelope.

    Exactly one of `data` (success) and `error_message` (failure) is set.
    Use the `ok()` and `fail()` constructors.
    """

    identifier: str
    succeeded: bool
    data: dict[str, Any] | None = None
    error_message: str | None = None
    error_type: str | None = None
    call_id: str | None = None

    @classmethod
    def ok(
        cls, identifier: str, data: Mapping[str, Any], call_id: str | None = None
    ) -> InvocationResult:
        return cls(identifier=identifier, succeeded=True, data=dict(data), call_id=call_id)

    @classmethod
    def fail(
        cls,
        identifier: str,
        error_message: str,
        error_type: str | None = None,
        call_id: str | None = None,
    ) -> InvocationResult:
        return cls(
            identifier=identifier,
            succeeded=False,
            error_message=error_message,
            error_type=error_type,
            call_id=call_id,
        )

    def to_dict(self) -> dict[str, Any]:
        envelope: dict[str, Any] = {"succeeded": self.succeeded, "identifier": self.identifier}
        if self.succeeded:
            envelope["data"] = self.data
        else:
            envelope["error_message"] = self.error_message
            envelope["error_type"] = self.error_type
        if self.call_id is not None:
            envelope["call_id"] = self.call_id
        return envelope


class Dispatcher:
    """
    Resolves, validates and executes tool invocations.

    `strict=True` rejects input keys the schema does not declare; the default
    lenient mode drops them.
    """

    def __init__(self, registry: ToolRegistry, strict: bool = False) -> None:
        self.registry = registry
        self.strict = strict

    def validate(self, tool: Tool, raw_input: Any) -> dict[str, Any]:
        """
        Validate raw input against the tool's fields.

        Returns the normalized params (defaults applied).

        Raises:
            ValidationError: MissingField, TypeMismatch, InvalidValue, UnexpectedField
        """
        return validate_input(tool.fields, raw_input, strict=self.strict)

    async def dispatch(
        self, request: InvocationRequest, context: ExecutionContext | None = None
    ) -> InvocationResult:
        """Run one invocation. Never raises; failures come back as results."""
        name = request.identifier
        call_id = request.call_id
        context = context or ExecutionContext()
        logger.debug(f"Dispatching {name} (call_id={call_id})")

        try:
            tool = self.registry.resolve([name])[0]
        except UnknownIdentifier as e:
            logger.warning(f"Dispatch rejected: {e}")
            return InvocationResult.fail(name, str(e), type(e).__name__, call_id)

        try:
            params = self.validate(tool, request.raw_input)
        except ValidationError as e:
            logger.warning(f"Invalid input for {name}: {e}")
            return InvocationResult.fail(name, str(e), type(e).__name__, call_id)

        try:
            if inspect.iscoroutinefunction(tool.execute):
                data = await tool.execute(params, context)
            else:
                # Sync executor - run in thread pool to avoid blocking event loop
                data = await asyncio.to_thread(tool.execute, params, context)
        except Exception as e:
            logger.exception(f"Tool {name} execution failed")
            return InvocationResult.fail(name, str(e) or type(e).__name__, type(e).__name__, call_id)

        if not isinstance(data, Mapping):
            message = f"executor returned {type(data).__name__}, expected a mapping"
            logger.warning(f"Tool {name}: {message}")
            return InvocationResult.fail(name, message, "TypeError", call_id)

        return InvocationResult.ok(name, data, call_id)

    def dispatch_sync(
        self, request: InvocationRequest, context: ExecutionContext | None = None
    ) -> InvocationResult:
        """Blocking wrapper around dispatch(). Not for use inside a running event loop."""
        return asyncio.run(self.dispatch(request, context))

    async def dispatch_all(
        self,
        requests: Sequence[InvocationRequest],
        context: ExecutionContext | None = None,
    ) -> list[InvocationResult]:
        """Run every request concurrently. Results come back in input order."""
        if not requests:
            return []
        results = await asyncio.gather(*(self.dispatch(r, context) for r in requests))
        return list(results)
