"""Google Workspace tools daemon: tool registry, dispatcher, planner-driven chat and HTTP service."""

__version__ = "0.1.0"
