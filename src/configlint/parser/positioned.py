"""JSON parser with position tracking for rich error reporting."""

from __future__ import annotations

import json
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

_MAX_DEPTH = 256

_WHITESPACE = b" \t\r\n"
_NUMBER_RE = re.compile(rb"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_SIMPLE_ESCAPES = b'"\\/bfnrt'
_HEX_DIGITS = b"0123456789abcdefABCDEF"
_LITERALS = ((b"true", "bool"), (b"false", "bool"), (b"null", "null"))


class NodeKind(StrEnum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"


@dataclass(frozen=True)
class Position:
    """Where a node starts in the source and how many bytes it spans."""

    line: int
    column: int
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass(frozen=True)
class ObjectEntry:
    """One member of a JSON object: the key's own position plus its value."""

    key_position: Position
    value: PositionedNode


@dataclass(frozen=True)
class PositionedNode:
    """A JSON value annotated with its source position."""

    kind: NodeKind
    position: Position
    entries: Mapping[str, ObjectEntry] = field(
        default_factory=lambda: MappingProxyType({})
    )
    items: tuple[PositionedNode, ...] = ()

    def get(self, key: str) -> PositionedNode | None:
        """Return the value for *key* if this is an object that contains it."""
        if self.kind is not NodeKind.OBJECT:
            return None
        entry = self.entries.get(key)
        return entry.value if entry is not None else None

    def at(self, index: int) -> PositionedNode | None:
        """Return the item at *index* if this is an array that has it."""
        if self.kind is not NodeKind.ARRAY or not 0 <= index < len(self.items):
            return None
        return self.items[index]

    def walk(self) -> Iterator[PositionedNode]:
        """Yield this node and every descendant, depth first."""
        yield self
        for entry in self.entries.values():
            yield from entry.value.walk()
        for item in self.items:
            yield from item.walk()


class _InvalidJSON(Exception):
    """Internal signal that the scan hit something that is not JSON."""


class _Scanner:
    """Single left-to-right pass over UTF-8 bytes tracking line and column."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0
        self._line = 1
        self._column = 1

    # -- cursor ---------------------------------------------------------------

    def _peek(self) -> int | None:
        if self._offset >= len(self._data):
            return None
        return self._data[self._offset]

    def _advance(self, count: int = 1) -> None:
        """Consume *count* bytes that contain no newline."""
        for byte in self._data[self._offset : self._offset + count]:
            # UTF-8 continuation bytes belong to the previous character.
            if byte & 0xC0 != 0x80:
                self._column += 1
        self._offset += count

    def _skip_whitespace(self) -> None:
        while (byte := self._peek()) is not None and byte in _WHITESPACE:
            self._offset += 1
            if byte == 0x0A:
                self._line += 1
                self._column = 1
            else:
                self._column += 1

    def _mark(self) -> tuple[int, int, int]:
        return self._line, self._column, self._offset

    def _position(self, start: tuple[int, int, int]) -> Position:
        line, column, offset = start
        return Position(line=line, column=column, offset=offset, length=self._offset - offset)

    # -- grammar --------------------------------------------------------------

    def document(self) -> PositionedNode:
        self._skip_whitespace()
        node = self._value(depth=0)
        self._skip_whitespace()
        if self._peek() is not None:
            raise _InvalidJSON("trailing data after document")
        return node

    def _value(self, depth: int) -> PositionedNode:
        if depth > _MAX_DEPTH:
            raise _InvalidJSON("document nesting is too deep")
        byte = self._peek()
        if byte is None:
            raise _InvalidJSON("unexpected end of document")
        if byte == ord("{"):
            return self._object(depth)
        if byte == ord("["):
            return self._array(depth)
        if byte == ord('"'):
            start = self._mark()
            self._string()
            return PositionedNode(NodeKind.STRING, self._position(start))
        if byte == ord("-") or ord("0") <= byte <= ord("9"):
            return self._number()
        return self._literal()

    def _object(self, depth: int) -> PositionedNode:
        start = self._mark()
        self._advance()
        entries: dict[str, ObjectEntry] = {}
        self._skip_whitespace()
        if self._peek() == ord("}"):
            self._advance()
            return PositionedNode(
                NodeKind.OBJECT, self._position(start), MappingProxyType(entries)
            )
        while True:
            if self._peek() != ord('"'):
                raise _InvalidJSON("expected an object key")
            key_start = self._mark()
            key = self._string()
            key_position = self._position(key_start)
            self._skip_whitespace()
            if self._peek() != ord(":"):
                raise _InvalidJSON("expected ':' after object key")
            self._advance()
            self._skip_whitespace()
            value = self._value(depth + 1)
            # Last occurrence wins, matching json.loads.
            entries[key] = ObjectEntry(key_position=key_position, value=value)
            self._skip_whitespace()
            byte = self._peek()
            if byte == ord(","):
                self._advance()
                self._skip_whitespace()
                continue
            if byte == ord("}"):
                self._advance()
                return PositionedNode(
                    NodeKind.OBJECT, self._position(start), MappingProxyType(entries)
                )
            raise _InvalidJSON("expected ',' or '}' in object")

    def _array(self, depth: int) -> PositionedNode:
        start = self._mark()
        self._advance()
        items: list[PositionedNode] = []
        self._skip_whitespace()
        if self._peek() == ord("]"):
            self._advance()
            return PositionedNode(NodeKind.ARRAY, self._position(start), items=())
        while True:
            items.append(self._value(depth + 1))
            self._skip_whitespace()
            byte = self._peek()
            if byte == ord(","):
                self._advance()
                self._skip_whitespace()
                continue
            if byte == ord("]"):
                self._advance()
                return PositionedNode(NodeKind.ARRAY, self._position(start), items=tuple(items))
            raise _InvalidJSON("expected ',' or ']' in array")

    def _string(self) -> str:
        """Consume a string literal and return its decoded value."""
        begin = self._offset
        self._advance()
        while True:
            byte = self._peek()
            if byte is None:
                raise _InvalidJSON("unterminated string")
            if byte < 0x20:
                raise _InvalidJSON("control character in string")
            if byte == ord('"'):
                self._advance()
                break
            if byte == ord("\\"):
                self._escape()
                continue
            self._advance()
        literal = self._data[begin : self._offset].decode("utf-8")
        try:
            return json.loads(literal)
        except json.JSONDecodeError as exc:
            # Lone surrogates and similar oddities the byte scan lets through.
            raise _InvalidJSON(str(exc)) from exc

    def _escape(self) -> None:
        self._advance()
        byte = self._peek()
        if byte is None or byte not in _SIMPLE_ESCAPES + b"u":
            raise _InvalidJSON("invalid escape sequence")
        self._advance()
        if byte == ord("u"):
            digits = self._data[self._offset : self._offset + 4]
            if len(digits) != 4 or any(d not in _HEX_DIGITS for d in digits):
                raise _InvalidJSON("invalid unicode escape")
            self._advance(4)

    def _number(self) -> PositionedNode:
        start = self._mark()
        match = _NUMBER_RE.match(self._data, self._offset)
        if match is None:
            raise _InvalidJSON("invalid number")
        self._advance(match.end() - match.start())
        return PositionedNode(NodeKind.NUMBER, self._position(start))

    def _literal(self) -> PositionedNode:
        start = self._mark()
        for text, kind in _LITERALS:
            if self._data.startswith(text, self._offset):
                self._advance(len(text))
                return PositionedNode(NodeKind(kind), self._position(start))
        raise _InvalidJSON("unexpected character")


def parse(text: str) -> PositionedNode | None:
    """Parse *text* into a positioned node tree.

    Returns ``None`` when the text is not valid JSON (or nests deeper than the
    safety limit); callers should then report problems without source
    positions.  Offsets and lengths are measured in UTF-8 bytes.
    """
    try:
        return _Scanner(text.encode("utf-8")).document()
    except (_InvalidJSON, UnicodeEncodeError):
        return None
