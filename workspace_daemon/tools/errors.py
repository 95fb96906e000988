"""
Error taxonomy for the tool system.

Registration errors (DuplicateIdentifier, InvalidDescriptor) are raised while
the registry is built and are meant to abort startup. Lookup and validation
errors are raised synchronously by the registry and validator; the dispatcher
turns them into failed InvocationResults so a batch degrades per item.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .dispatcher import InvocationResult


class ToolError(Exception):
    """Base class for every tool-system error."""


# --- Registry ---


class RegistryError(ToolError):
    """Raised for registration and lookup failures."""


class DuplicateIdentifier(RegistryError):
    def __init__(self, identifier: str) -> None:
        super().__init__(f"duplicate identifier: {identifier}")
        self.identifier = identifier


class InvalidDescriptor(RegistryError):
    def __init__(self, identifier: str, reason: str) -> None:
        super().__init__(f"invalid descriptor {identifier or '<unnamed>'}: {reason}")
        self.identifier = identifier
        self.reason = reason


class UnknownIdentifier(RegistryError):
    def __init__(self, identifier: str) -> None:
        super().__init__(f"unknown identifier: {identifier}")
        self.identifier = identifier


# --- Validation ---


class ValidationError(ToolError):
    """Raised when raw input does not satisfy a tool's schema."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class MissingField(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(field, f"missing field: {field}")


class TypeMismatch(ValidationError):
    def __init__(self, field: str, expected: str, actual: object) -> None:
        super().__init__(
            field,
            f"type mismatch: field '{field}' expected {expected}, got {type(actual).__name__}",
        )
        self.expected = expected


class InvalidValue(ValidationError):
    def __init__(self, field: str, reason: str) -> None:
        super().__init__(field, f"invalid value for field '{field}': {reason}")
        self.reason = reason


class UnexpectedField(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(field, f"unexpected field: {field}")


# --- Execution ---


class ToolExecutionError(ToolError):
    """Raised by callers that need a successful result but got a failed one."""

    def __init__(self, result: InvocationResult) -> None:
        super().__init__(f"{result.identifier} failed: {result.error_message}")
        self.result = result
