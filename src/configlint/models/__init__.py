"""Pydantic models describing schema violations and where they occur."""

from configlint.models.errors import (
    ErrorKind,
    FileLocation,
    ProblemKind,
    SourcePosition,
    UnderlineRange,
)

__all__ = [
    "ErrorKind",
    "FileLocation",
    "ProblemKind",
    "SourcePosition",
    "UnderlineRange",
]
