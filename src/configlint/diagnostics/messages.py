"""Headline and underline messages for each kind of schema violation."""

from __future__ import annotations

import json
from typing import Any

from configlint.models.errors import ErrorKind, ProblemKind


def _json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _types(expected: Any) -> str:
    if isinstance(expected, list):
        return " or ".join(str(t) for t in expected)
    return str(expected)


def headline(kind: ProblemKind) -> str:
    """Short phrase that precedes the path in the ``error:`` line."""
    match kind.kind:
        case ErrorKind.TYPE:
            return "invalid type for"
        case ErrorKind.REQUIRED:
            return "missing property in"
        case ErrorKind.ENUM | ErrorKind.CONST | ErrorKind.PATTERN:
            return "unexpected value for"
        case (
            ErrorKind.MINIMUM
            | ErrorKind.MAXIMUM
            | ErrorKind.EXCLUSIVE_MINIMUM
            | ErrorKind.EXCLUSIVE_MAXIMUM
            | ErrorKind.MULTIPLE_OF
        ):
            return "value out of range for"
        case ErrorKind.MIN_LENGTH | ErrorKind.MAX_LENGTH:
            return "invalid length for"
        case (
            ErrorKind.MIN_ITEMS
            | ErrorKind.MAX_ITEMS
            | ErrorKind.MIN_PROPERTIES
            | ErrorKind.MAX_PROPERTIES
            | ErrorKind.ADDITIONAL_ITEMS
        ):
            return "wrong number of entries in"
        case ErrorKind.UNIQUE_ITEMS:
            return "duplicate items in"
        case ErrorKind.ADDITIONAL_PROPERTIES | ErrorKind.UNEVALUATED_PROPERTIES:
            return "unknown properties in"
        case ErrorKind.UNEVALUATED_ITEMS | ErrorKind.CONTAINS:
            return "invalid items in"
        case ErrorKind.FORMAT | ErrorKind.CONTENT_ENCODING | ErrorKind.CONTENT_MEDIA_TYPE:
            return "invalid format for"
        case (
            ErrorKind.ANY_OF
            | ErrorKind.ONE_OF_NOT_VALID
            | ErrorKind.ONE_OF_MULTIPLE_VALID
            | ErrorKind.NOT
        ):
            return "no matching variant for"
        case ErrorKind.REFERENCE:
            return "unresolvable schema for"
        case ErrorKind.FALSE_SCHEMA:
            return "disallowed value for"
        case ErrorKind.CUSTOM:
            return "invalid value for"


def message(kind: ProblemKind) -> str:
    """The sentence printed after the underline carets."""
    limit = kind.limit
    match kind.kind:
        case ErrorKind.TYPE:
            return f"this is not of type `{_types(kind.expected)}`"
        case ErrorKind.REQUIRED:
            return f"this is missing required property `{kind.property_name}`"
        case ErrorKind.ENUM:
            return f"expected one of `{_json(kind.expected)}`"
        case ErrorKind.CONST:
            return f"expected `{_json(kind.expected)}`"
        case ErrorKind.PATTERN:
            return f"this does not match the pattern `{kind.expected}`"
        case ErrorKind.MINIMUM:
            return f"this must be at least {_json(limit)}"
        case ErrorKind.MAXIMUM:
            return f"this must be less than or equal to {_json(limit)}"
        case ErrorKind.EXCLUSIVE_MINIMUM:
            return f"this must be greater than {_json(limit)}"
        case ErrorKind.EXCLUSIVE_MAXIMUM:
            return f"this must be less than {_json(limit)}"
        case ErrorKind.MULTIPLE_OF:
            return f"this must be a multiple of {_json(limit)}"
        case ErrorKind.MIN_LENGTH:
            return f"this must have at least {_json(limit)} characters"
        case ErrorKind.MAX_LENGTH:
            return f"this must have less than or equal to {_json(limit)} characters"
        case ErrorKind.MIN_ITEMS:
            return f"this must have at least {_json(limit)} items"
        case ErrorKind.MAX_ITEMS:
            return f"this must have less than or equal to {_json(limit)} items"
        case ErrorKind.MIN_PROPERTIES:
            return f"this must have at least {_json(limit)} properties"
        case ErrorKind.MAX_PROPERTIES:
            return f"this must have less than or equal to {_json(limit)} properties"
        case ErrorKind.UNIQUE_ITEMS:
            return "this contains duplicate items"
        case ErrorKind.ADDITIONAL_ITEMS:
            return f"this must contain less than or equal to {_json(limit)} items"
        case ErrorKind.ADDITIONAL_PROPERTIES:
            return f"this contains unknown properties [{', '.join(kind.unexpected)}]"
        case ErrorKind.UNEVALUATED_ITEMS:
            return f"this contains unevaluated items [{', '.join(kind.unexpected)}]"
        case ErrorKind.UNEVALUATED_PROPERTIES:
            return f"this contains unevaluated properties [{', '.join(kind.unexpected)}]"
        case ErrorKind.CONTAINS:
            return "this does not contain valid items"
        case ErrorKind.FORMAT:
            return f"this is not a valid `{kind.expected}`"
        case ErrorKind.CONTENT_ENCODING:
            return f"this is not encoded as `{kind.expected}`"
        case ErrorKind.CONTENT_MEDIA_TYPE:
            return f"this is not the media type `{kind.expected}`"
        case ErrorKind.ANY_OF:
            return "this is not valid for any of the allowed variants"
        case ErrorKind.ONE_OF_NOT_VALID:
            return "this is not valid for any variant"
        case ErrorKind.ONE_OF_MULTIPLE_VALID:
            return "this is valid for multiple variants"
        case ErrorKind.NOT:
            return f"this must not match `{_json(kind.expected)}`"
        case ErrorKind.REFERENCE:
            return f"this could not be resolved: {kind.message}"
        case ErrorKind.CUSTOM:
            return kind.message or "this is not valid"
        case ErrorKind.FALSE_SCHEMA:
            return "this is not allowed"
