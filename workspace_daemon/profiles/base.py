"""
Base types for the profile system.

A Profile bundles:
- System prompt (the assistant's persona/instructions)
- Tool selection (slugs and slug prefixes resolved against a registry)
- Settings (max rounds, tokens, temperature)
"""

from __future__ import annotations

from dataclasses import dataclass

from workspace_daemon.tools import Tool, ToolRegistry


@dataclass(frozen=True)
class Profile:
    """
    Immutable assistant profile configuration.

    Profiles name tools, they don't hold them: the registry is built at
    startup and `select_tools()` resolves the profile against it.
    """

    name: str
    system_prompt: str
    tool_names: tuple[str, ...] = ()
    tool_prefixes: tuple[str, ...] = ()
    max_tool_rounds: int = 8
    max_tokens: int = 4096
    temperature: float = 0.7

    def select_tools(self, registry: ToolRegistry) -> tuple[Tool, ...]:
        """
        Tools for this profile, in registry order for prefixes followed by
        explicitly named tools.

        Raises:
            UnknownIdentifier: if an explicitly named tool is not registered
        """
        selected: dict[str, Tool] = {}
        for prefix in self.tool_prefixes:
            for t in registry.with_prefix(prefix):
                selected.setdefault(t.name, t)
        for t in registry.resolve(self.tool_names):
            selected.setdefault(t.name, t)
        return tuple(selected.values())
