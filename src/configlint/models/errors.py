"""Structured problem models with JSON source position tracking."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict


class ErrorKind(StrEnum):
    """Closed set of schema violations, mirroring the validator's keywords."""

    TYPE = "type"
    REQUIRED = "required"
    ENUM = "enum"
    CONST = "const"
    PATTERN = "pattern"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    EXCLUSIVE_MINIMUM = "exclusive_minimum"
    EXCLUSIVE_MAXIMUM = "exclusive_maximum"
    MULTIPLE_OF = "multiple_of"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    MIN_ITEMS = "min_items"
    MAX_ITEMS = "max_items"
    MIN_PROPERTIES = "min_properties"
    MAX_PROPERTIES = "max_properties"
    UNIQUE_ITEMS = "unique_items"
    ADDITIONAL_ITEMS = "additional_items"
    ADDITIONAL_PROPERTIES = "additional_properties"
    UNEVALUATED_ITEMS = "unevaluated_items"
    UNEVALUATED_PROPERTIES = "unevaluated_properties"
    CONTAINS = "contains"
    FORMAT = "format"
    CONTENT_ENCODING = "content_encoding"
    CONTENT_MEDIA_TYPE = "content_media_type"
    ANY_OF = "any_of"
    ONE_OF_NOT_VALID = "one_of_not_valid"
    ONE_OF_MULTIPLE_VALID = "one_of_multiple_valid"
    NOT = "not"
    REFERENCE = "reference"
    CUSTOM = "custom"
    FALSE_SCHEMA = "false_schema"


class ProblemKind(BaseModel):
    """A violation kind plus the data its message needs."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    limit: int | float | None = None
    expected: Any = None
    property_name: str | None = None
    unexpected: list[str] = []
    message: str | None = None


class SourcePosition(BaseModel):
    """Points to exact line and column in the JSON source."""

    model_config = ConfigDict(frozen=True)

    line: int
    column: int


class FileLocation(BaseModel):
    """The file a problem came from and, when known, where in it."""

    model_config = ConfigDict(frozen=True)

    path: Path
    position: SourcePosition | None = None

    def __str__(self) -> str:
        if self.position is None:
            return str(self.path)
        return f"{self.path}:{self.position.line}:{self.position.column}"


class UnderlineRange(BaseModel):
    """Half-open character range of a reconstructed source line to underline."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    def __len__(self) -> int:
        return max(self.end - self.start, 0)
