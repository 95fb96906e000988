"""
Tools package: the capability registry and dispatcher.

Architecture:
- Each tool is a Tool (spec + executor) declared with the @tool decorator
- Service modules under google/ and insights/ export their tools
- build_registry() collects them; Dispatcher validates and runs invocations
- Profiles name tools by slug, they don't define them

Public API:
- Tool, ToolSpec, ExecutionContext: core types
- tool: decorator for creating tools from functions
- Field, FieldType, validate_input: input schemas
- ToolRegistry, build_registry: registry
- Dispatcher, InvocationRequest, InvocationResult: execution
"""

from .base import ExecutionContext, Tool, ToolFunction, ToolSpec, tool
from .dispatcher import Dispatcher, InvocationRequest, InvocationResult
from .errors import (
    DuplicateIdentifier,
    InvalidDescriptor,
    InvalidValue,
    MissingField,
    RegistryError,
    ToolError,
    ToolExecutionError,
    TypeMismatch,
    UnexpectedField,
    UnknownIdentifier,
    ValidationError,
)
from .registry import ToolRegistry, build_registry
from .schema import Field, FieldType, to_json_schema, validate_input

__all__ = [
    "Tool",
    "ToolSpec",
    "ToolFunction",
    "ExecutionContext",
    "tool",
    "Field",
    "FieldType",
    "validate_input",
    "to_json_schema",
    "ToolRegistry",
    "build_registry",
    "Dispatcher",
    "InvocationRequest",
    "InvocationResult",
    "ToolError",
    "RegistryError",
    "DuplicateIdentifier",
    "InvalidDescriptor",
    "UnknownIdentifier",
    "ValidationError",
    "MissingField",
    "TypeMismatch",
    "InvalidValue",
    "UnexpectedField",
    "ToolExecutionError",
]
