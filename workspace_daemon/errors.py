"""Errors raised by the workspace layer above the tool registry."""

from __future__ import annotations


class WorkspaceError(Exception):
    """Base class for agent and trigger errors."""


class ServiceNotConnected(WorkspaceError):
    def __init__(self, service: str) -> None:
        super().__init__(f"{service} not connected. Please authenticate first.")
        self.service = service


class UnknownTrigger(WorkspaceError):
    def __init__(self, trigger_id: str) -> None:
        super().__init__(f"unknown trigger: {trigger_id}")
        self.trigger_id = trigger_id
