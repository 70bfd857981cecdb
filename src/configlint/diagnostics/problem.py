"""Turns raw ``jsonschema`` failures into located, human-readable problems."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from jsonschema.exceptions import ValidationError
from pydantic import BaseModel, ConfigDict

from configlint.diagnostics import messages
from configlint.models.errors import (
    ErrorKind,
    FileLocation,
    ProblemKind,
    SourcePosition,
    UnderlineRange,
)
from configlint.parser.location import JsonPath, resolve, underline_range
from configlint.parser.positioned import PositionedNode
from configlint.style import normalize_note

# Keywords whose failure carries a numeric limit.
_LIMIT_KINDS: dict[str, ErrorKind] = {
    "minimum": ErrorKind.MINIMUM,
    "maximum": ErrorKind.MAXIMUM,
    "exclusiveMinimum": ErrorKind.EXCLUSIVE_MINIMUM,
    "exclusiveMaximum": ErrorKind.EXCLUSIVE_MAXIMUM,
    "multipleOf": ErrorKind.MULTIPLE_OF,
    "minLength": ErrorKind.MIN_LENGTH,
    "maxLength": ErrorKind.MAX_LENGTH,
    "minItems": ErrorKind.MIN_ITEMS,
    "maxItems": ErrorKind.MAX_ITEMS,
    "minProperties": ErrorKind.MIN_PROPERTIES,
    "maxProperties": ErrorKind.MAX_PROPERTIES,
}

# Keywords whose failure carries the keyword's own value as "expected".
_EXPECTED_KINDS: dict[str, ErrorKind] = {
    "type": ErrorKind.TYPE,
    "enum": ErrorKind.ENUM,
    "const": ErrorKind.CONST,
    "pattern": ErrorKind.PATTERN,
    "format": ErrorKind.FORMAT,
    "contentEncoding": ErrorKind.CONTENT_ENCODING,
    "contentMediaType": ErrorKind.CONTENT_MEDIA_TYPE,
    "not": ErrorKind.NOT,
}

_SIMPLE_KINDS: dict[str, ErrorKind] = {
    "uniqueItems": ErrorKind.UNIQUE_ITEMS,
    "anyOf": ErrorKind.ANY_OF,
    "contains": ErrorKind.CONTAINS,
    "minContains": ErrorKind.CONTAINS,
    "maxContains": ErrorKind.CONTAINS,
}

_REFERENCE_KEYWORDS = frozenset({"$ref", "$dynamicRef", "$recursiveRef"})

_UNEXPECTED_RE = re.compile(r"\((.*) (?:was|were) (?:unexpected|unevaluated)\)$")


class ValidationProblem(BaseModel):
    """One schema violation, enriched with its message, notes and location."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: ProblemKind
    instance_path: JsonPath
    notes: list[str] = []
    location: FileLocation | None = None
    source: str
    range: UnderlineRange

    @property
    def headline(self) -> str:
        return messages.headline(self.kind)

    @property
    def message(self) -> str:
        return messages.message(self.kind)

    @property
    def pointing_at(self) -> str:
        return self.instance_path.pointing_at()

    @property
    def line(self) -> int | None:
        if self.location is None or self.location.position is None:
            return None
        return self.location.position.line


# ---------------------------------------------------------------------------
# Kind extraction
# ---------------------------------------------------------------------------


def _missing_property(error: ValidationError) -> str | None:
    instance = error.instance if isinstance(error.instance, Mapping) else {}
    missing = [p for p in error.validator_value or () if p not in instance]
    for prop in missing:
        if error.message.startswith(repr(prop)):
            return str(prop)
    return str(missing[0]) if missing else None


def _additional_properties(error: ValidationError) -> list[str]:
    if not isinstance(error.instance, Mapping) or not isinstance(error.schema, Mapping):
        return []
    properties = error.schema.get("properties", {})
    patterns = "|".join(error.schema.get("patternProperties", {}))
    return [
        str(prop)
        for prop in error.instance
        if prop not in properties and not (patterns and re.search(patterns, prop))
    ]


def _unexpected_from_message(text: str) -> list[str]:
    match = _UNEXPECTED_RE.search(text)
    if match is None:
        return []
    names = []
    for part in match.group(1).split(", "):
        if len(part) >= 2 and part[0] == part[-1] and part[0] in "'\"":
            part = part[1:-1]
        names.append(part)
    return names


def _prefix_length(schema: Any) -> int:
    if not isinstance(schema, Mapping):
        return 0
    prefix = schema.get("prefixItems", schema.get("items", []))
    return len(prefix) if isinstance(prefix, list) else 0


def problem_kind(error: ValidationError) -> ProblemKind:
    """Classify a ``jsonschema`` failure into the closed :class:`ErrorKind` set."""
    keyword = error.validator
    value = error.validator_value

    if keyword is None:
        return ProblemKind(kind=ErrorKind.FALSE_SCHEMA)
    if keyword in _LIMIT_KINDS and isinstance(value, (int, float)) and not isinstance(value, bool):
        return ProblemKind(kind=_LIMIT_KINDS[keyword], limit=value)
    if keyword in _EXPECTED_KINDS:
        return ProblemKind(kind=_EXPECTED_KINDS[keyword], expected=value)
    if keyword in _SIMPLE_KINDS:
        return ProblemKind(kind=_SIMPLE_KINDS[keyword])
    if keyword in _REFERENCE_KEYWORDS:
        return ProblemKind(kind=ErrorKind.REFERENCE, message=error.message)

    match keyword:
        case "required":
            return ProblemKind(kind=ErrorKind.REQUIRED, property_name=_missing_property(error))
        case "additionalProperties":
            return ProblemKind(
                kind=ErrorKind.ADDITIONAL_PROPERTIES,
                unexpected=_additional_properties(error),
            )
        case "additionalItems" | "items" if value is False:
            return ProblemKind(kind=ErrorKind.ADDITIONAL_ITEMS, limit=_prefix_length(error.schema))
        case "unevaluatedProperties":
            return ProblemKind(
                kind=ErrorKind.UNEVALUATED_PROPERTIES,
                unexpected=_unexpected_from_message(error.message),
            )
        case "unevaluatedItems":
            return ProblemKind(
                kind=ErrorKind.UNEVALUATED_ITEMS,
                unexpected=_unexpected_from_message(error.message),
            )
        case "oneOf":
            if "is valid under each of" in error.message:
                return ProblemKind(kind=ErrorKind.ONE_OF_MULTIPLE_VALID)
            return ProblemKind(kind=ErrorKind.ONE_OF_NOT_VALID)
    return ProblemKind(kind=ErrorKind.CUSTOM, message=error.message)


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


def _schema_node(schema: Any, parts: Iterable[str | int]) -> Any:
    node = schema
    for part in parts:
        if isinstance(node, Mapping) and part in node:
            node = node[part]
        elif isinstance(node, list) and isinstance(part, int) and 0 <= part < len(node):
            node = node[part]
        else:
            return None
    return node


def schema_notes(
    schema: Any, schema_path: Iterable[str | int], fallback: Any = None
) -> list[str]:
    """Notes taken from the ``description`` of the schema owning the failed keyword.

    The first line reads ``this should be <description>``; further lines are
    passed through, trimmed and without trailing punctuation.
    """
    parent = list(schema_path)[:-1]
    node = _schema_node(schema, parent)
    if not isinstance(node, Mapping):
        node = fallback
    description = node.get("description") if isinstance(node, Mapping) else None
    if not isinstance(description, str):
        return []
    lines = [line for line in description.splitlines() if line.strip()]
    if not lines:
        return []
    notes = [f"this should be {normalize_note(lines[0])}"]
    notes.extend(normalize_note(line, lowercase_first=False) for line in lines[1:])
    return notes


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def build_problem(
    error: ValidationError,
    schema: Any,
    document: PositionedNode | None = None,
    file_path: Path | None = None,
) -> ValidationProblem:
    """Build a :class:`ValidationProblem` from one ``jsonschema`` failure.

    *document* is the positioned tree of the validated text; when both it and
    *file_path* are given the problem is located at ``file:line:column``.
    """
    instance_path = JsonPath.from_parts(error.absolute_path)
    source = instance_path.reconstruct(error.instance)

    location = None
    if document is not None and file_path is not None:
        node = resolve(document, instance_path)
        position = None
        if node is not None:
            position = SourcePosition(line=node.position.line, column=node.position.column)
        location = FileLocation(path=file_path, position=position)

    return ValidationProblem(
        kind=problem_kind(error),
        instance_path=instance_path,
        notes=schema_notes(schema, error.absolute_schema_path, fallback=error.schema),
        location=location,
        source=source,
        range=underline_range(source, len(instance_path.key_prefix())),
    )
