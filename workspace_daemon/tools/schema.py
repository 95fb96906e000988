"""
Typed input schemas for tools.

A schema is a tuple of Field declarations. Each Field carries a FieldType tag
plus the parts that tag needs (list items, nested fields, enum choices,
numeric bounds). One generic validator interprets every schema, and the same
declarations render to JSON Schema for the LLM.

Usage:
    FIELDS = (
        string("to", "Recipient email address"),
        integer("max_results", "Maximum results", default=10),
        list_of("labels", string("label"), required=False),
    )
    params = validate_input(FIELDS, {"to": "a@b.com"})
    # {"to": "a@b.com", "max_results": 10}
"""

from __future__ import annotations

import copy
import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import InvalidValue, MissingField, TypeMismatch, UnexpectedField


class FieldType(Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    LIST = "list"
    OBJECT = "object"
    ENUM = "enum"
    ANY = "any"


class _Missing:
    """Sentinel for 'no default declared'."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class Field:
    """One parameter of a tool's input schema."""

    name: str
    type: FieldType
    description: str = ""
    required: bool = True
    default: Any = MISSING
    items: Field | None = None  # element schema for LIST
    fields: tuple[Field, ...] = ()  # nested schema for OBJECT (empty = free-form)
    choices: tuple[Any, ...] = ()  # allowed values for ENUM
    minimum: float | None = None
    maximum: float | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


# --- Field constructors ---


def _optional(required: bool, default: Any) -> bool:
    # Declaring a default makes the field optional
    return required and default is MISSING


def string(
    name: str, description: str = "", *, required: bool = True, default: Any = MISSING
) -> Field:
    return Field(name, FieldType.STRING, description, _optional(required, default), default)


def number(
    name: str,
    description: str = "",
    *,
    required: bool = True,
    default: Any = MISSING,
    minimum: float | None = None,
    maximum: float | None = None,
) -> Field:
    return Field(
        name,
        FieldType.NUMBER,
        description,
        _optional(required, default),
        default,
        minimum=minimum,
        maximum=maximum,
    )


def integer(
    name: str,
    description: str = "",
    *,
    required: bool = True,
    default: Any = MISSING,
    minimum: float | None = None,
    maximum: float | None = None,
) -> Field:
    return Field(
        name,
        FieldType.INTEGER,
        description,
        _optional(required, default),
        default,
        minimum=minimum,
        maximum=maximum,
    )


def boolean(
    name: str, description: str = "", *, required: bool = True, default: Any = MISSING
) -> Field:
    return Field(name, FieldType.BOOLEAN, description, _optional(required, default), default)


def list_of(
    name: str,
    items: Field,
    description: str = "",
    *,
    required: bool = True,
    default: Any = MISSING,
) -> Field:
    return Field(
        name, FieldType.LIST, description, _optional(required, default), default, items=items
    )


def nested(
    name: str,
    fields: tuple[Field, ...] = (),
    description: str = "",
    *,
    required: bool = True,
    default: Any = MISSING,
) -> Field:
    return Field(
        name, FieldType.OBJECT, description, _optional(required, default), default, fields=fields
    )


def enum(
    name: str,
    choices: tuple[Any, ...],
    description: str = "",
    *,
    required: bool = True,
    default: Any = MISSING,
) -> Field:
    return Field(
        name, FieldType.ENUM, description, _optional(required, default), default, choices=choices
    )


def anything(name: str, description: str = "", *, required: bool = True) -> Field:
    return Field(name, FieldType.ANY, description, required)


# --- Validation ---


def _join(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


def _check_bounds(field: Field, value: float, path: str) -> None:
    if not math.isfinite(value):
        raise InvalidValue(path, f"{value} is not a finite number")
    if field.minimum is not None and value < field.minimum:
        raise InvalidValue(path, f"{value} is less than minimum {field.minimum}")
    if field.maximum is not None and value > field.maximum:
        raise InvalidValue(path, f"{value} is greater than maximum {field.maximum}")


def _check_value(field: Field, value: Any, path: str, strict: bool) -> Any:
    """Check one value against its field and return the normalized value."""
    kind = field.type

    if kind is FieldType.ANY:
        return value

    if kind is FieldType.STRING:
        if not isinstance(value, str):
            raise TypeMismatch(path, "string", value)
        return value

    if kind is FieldType.BOOLEAN:
        if not isinstance(value, bool):
            raise TypeMismatch(path, "boolean", value)
        return value

    if kind is FieldType.NUMBER:
        # bool is an int subclass but never a number here
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeMismatch(path, "number", value)
        _check_bounds(field, value, path)
        return value

    if kind is FieldType.INTEGER:
        if isinstance(value, bool):
            raise TypeMismatch(path, "integer", value)
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if not isinstance(value, int):
            raise TypeMismatch(path, "integer", value)
        _check_bounds(field, value, path)
        return value

    if kind is FieldType.ENUM:
        # True == 1, so booleans only match boolean choices
        bool_mismatch = isinstance(value, bool) and not any(
            isinstance(c, bool) for c in field.choices
        )
        if bool_mismatch or value not in field.choices:
            allowed = ", ".join(repr(c) for c in field.choices)
            raise InvalidValue(path, f"{value!r} is not one of {allowed}")
        return value

    if kind is FieldType.LIST:
        if not isinstance(value, (list, tuple)):
            raise TypeMismatch(path, "list", value)
        if field.items is None:
            return list(value)
        return [
            _check_value(field.items, item, f"{path}[{i}]", strict)
            for i, item in enumerate(value)
        ]

    if kind is FieldType.OBJECT:
        if not isinstance(value, Mapping):
            raise TypeMismatch(path, "object", value)
        if not field.fields:
            return dict(value)
        return _validate_object(field.fields, value, path, strict)

    raise TypeMismatch(path, str(kind), value)


def _validate_object(
    fields: tuple[Field, ...], raw: Mapping[str, Any], prefix: str, strict: bool
) -> dict[str, Any]:
    normalized: dict[str, Any] = {}

    for field in fields:
        path = _join(prefix, field.name)
        # JSON null is treated the same as an omitted key
        if raw.get(field.name) is None:
            if field.has_default:
                normalized[field.name] = _check_value(
                    field, copy.deepcopy(field.default), path, strict
                )
            elif field.required:
                raise MissingField(path)
            continue
        normalized[field.name] = _check_value(field, raw[field.name], path, strict)

    if strict:
        known = {f.name for f in fields}
        for key in raw:
            if key not in known:
                raise UnexpectedField(_join(prefix, str(key)))

    return normalized


def validate_input(
    fields: tuple[Field, ...], raw_input: Any, strict: bool = False
) -> dict[str, Any]:
    """
    Validate raw input against a schema.

    Returns a new dict with defaults applied for omitted optional fields.
    Unknown keys are dropped in lenient mode and rejected in strict mode.

    Raises:
        MissingField, TypeMismatch, InvalidValue, UnexpectedField
    """
    if raw_input is None:
        raw_input = {}
    if not isinstance(raw_input, Mapping):
        raise TypeMismatch("<input>", "object", raw_input)
    return _validate_object(fields, raw_input, "", strict)


# --- Schema checks (registration time) ---


def schema_problems(fields: tuple[Field, ...], prefix: str = "") -> list[str]:
    """Return human-readable problems with a schema declaration (empty if sound)."""
    if not isinstance(fields, (tuple, list)):
        where = prefix or "<root>"
        return [f"{where}: fields must be a sequence of Field, got {type(fields).__name__}"]

    problems: list[str] = []
    seen: set[str] = set()

    for field in fields:
        if not isinstance(field, Field):
            problems.append(f"{prefix or '<root>'}: {field!r} is not a Field")
            continue
        if not isinstance(field.name, str):
            problems.append(f"{prefix or '<root>'}: field name {field.name!r} is not a string")
            continue
        path = _join(prefix, field.name)
        if not field.name:
            problems.append(f"{prefix or '<root>'}: field with empty name")
        if field.name in seen:
            problems.append(f"{path}: duplicate field name")
        seen.add(field.name)
        problems.extend(_field_problems(field, path))

    return problems


def _field_problems(field: Field, path: str) -> list[str]:
    if not isinstance(field.type, FieldType):
        return [f"{path}: unknown type {field.type!r}"]

    problems: list[str] = []
    kind = field.type

    if kind is FieldType.LIST:
        if field.items is None:
            problems.append(f"{path}: list field without items")
        elif not isinstance(field.items, Field):
            problems.append(f"{path}: list items must be a Field")
        else:
            problems.extend(_field_problems(field.items, f"{path}[]"))
    elif kind is FieldType.OBJECT:
        problems.extend(schema_problems(field.fields, path))
    elif kind is FieldType.ENUM and not field.choices:
        problems.append(f"{path}: enum field without choices")

    if field.minimum is not None and field.maximum is not None and field.minimum > field.maximum:
        problems.append(f"{path}: minimum {field.minimum} exceeds maximum {field.maximum}")

    if field.has_default and not problems:
        try:
            _check_value(field, field.default, path, strict=False)
        except (TypeMismatch, InvalidValue, MissingField) as e:
            problems.append(f"{path}: default does not validate ({e})")

    return problems


# --- JSON Schema rendering ---

_JSON_TYPES = {
    FieldType.STRING: "string",
    FieldType.NUMBER: "number",
    FieldType.INTEGER: "integer",
    FieldType.BOOLEAN: "boolean",
    FieldType.LIST: "array",
    FieldType.OBJECT: "object",
}


def _field_json_schema(field: Field) -> dict[str, Any]:
    schema: dict[str, Any] = {}
    kind = field.type

    if kind in _JSON_TYPES:
        schema["type"] = _JSON_TYPES[kind]
    if kind is FieldType.LIST and field.items is not None:
        schema["items"] = _field_json_schema(field.items)
    elif kind is FieldType.OBJECT:
        if field.fields:
            schema.update(to_json_schema(field.fields))
        else:
            schema["additionalProperties"] = True
    elif kind is FieldType.ENUM:
        if all(isinstance(c, str) for c in field.choices):
            schema["type"] = "string"
        schema["enum"] = list(field.choices)

    if field.description:
        schema["description"] = field.description
    if field.has_default:
        default = field.default
        schema["default"] = list(default) if isinstance(default, tuple) else default
    if field.minimum is not None:
        schema["minimum"] = field.minimum
    if field.maximum is not None:
        schema["maximum"] = field.maximum
    return schema


def to_json_schema(fields: tuple[Field, ...]) -> dict[str, Any]:
    """Render a schema as a JSON Schema object for LLM function calling."""
    return {
        "type": "object",
        "properties": {f.name: _field_json_schema(f) for f in fields},
        "required": [f.name for f in fields if f.required],
    }
