"""JSON parsing with line fidelity for configlint."""

from configlint.parser.location import Index, JsonPath, Property, resolve, underline_range
from configlint.parser.positioned import NodeKind, Position, PositionedNode, parse

__all__ = [
    "Index",
    "JsonPath",
    "NodeKind",
    "Position",
    "PositionedNode",
    "Property",
    "parse",
    "resolve",
    "underline_range",
]
