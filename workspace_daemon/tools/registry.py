"""
Tool registry: holds tool descriptors keyed by slug.

Architecture:
- Tools are declared in service modules (google/*, insights/*)
- build_registry() collects them into a fresh registry at startup
- The registry is read-only after startup and is passed explicitly to the
  dispatcher, chat service, agent and server (no global instance)
- Registration order is preserved for listing
"""

from __future__ import annotations

import logging
from typing import Iterable

from .base import Tool, ToolSpec
from .errors import DuplicateIdentifier, InvalidDescriptor, UnknownIdentifier
from .schema import schema_problems

logger = logging.getLogger("workspace.tools")


class ToolRegistry:
    """
    Central registry for tool descriptors.

    Provides:
    - Registration with descriptor checks
    - Lookup by slug, ordered resolution, prefix queries
    - Listing of tools and their specs in registration order
    """

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}

    def _check(self, tool: Tool) -> None:
        if not isinstance(tool, Tool):
            raise InvalidDescriptor("", f"expected Tool, got {type(tool).__name__}")
        name = tool.name
        if not name:
            raise InvalidDescriptor(name, "empty identifier")
        if not tool.display_name:
            raise InvalidDescriptor(name, "empty display name")
        if tool.execute is None or not callable(tool.execute):
            raise InvalidDescriptor(name, "executor is not callable")
        if not isinstance(tool.fields, (tuple, list)):
            raise InvalidDescriptor(name, "fields must be a sequence of Field")
        problems = schema_problems(tool.fields)
        if problems:
            raise InvalidDescriptor(name, "; ".join(problems))
        if name in self._tools:
            raise DuplicateIdentifier(name)

    def register(self, tool: Tool) -> None:
        """Register a tool. A failed registration leaves the registry unchanged."""
        self._check(tool)
        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    def register_all(self, tools: Iterable[Tool]) -> None:
        for t in tools:
            self.register(t)

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def resolve(self, names: Iterable[str]) -> tuple[Tool, ...]:
        """
        Look up tools in the order requested.

        Raises:
            UnknownIdentifier: naming the first slug that is not registered
        """
        resolved = []
        for name in names:
            t = self._tools.get(name)
            if t is None:
                raise UnknownIdentifier(name)
            resolved.append(t)
        return tuple(resolved)

    def list_all(self) -> tuple[Tool, ...]:
        """All tools in registration order."""
        return tuple(self._tools.values())

    def with_prefix(self, prefix: str) -> tuple[Tool, ...]:
        return tuple(t for name, t in self._tools.items() if name.startswith(prefix))

    @property
    def available_tools(self) -> list[str]:
        """All registered slugs in registration order."""
        return list(self._tools.keys())

    def specs(self, names: Iterable[str] | None = None) -> tuple[ToolSpec, ...]:
        """Specs for the named tools (all tools when names is None)."""
        tools = self.list_all() if names is None else self.resolve(names)
        return tuple(t.spec for t in tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


def build_registry() -> ToolRegistry:
    """
    Build a registry populated with every Google Workspace and insight tool.

    Registration errors propagate: a broken catalogue must abort startup.
    """
    from .google import GOOGLE_TOOLS
    from .insights import INSIGHT_TOOLS

    registry = ToolRegistry()
    registry.register_all(GOOGLE_TOOLS)
    registry.register_all(INSIGHT_TOOLS)
    logger.info(f"Registry populated with {len(registry)} tools")
    return registry
