"""Instance paths: resolving them against positioned trees and describing them."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from configlint.models.errors import UnderlineRange
from configlint.parser.positioned import PositionedNode

ROOT_LABEL = "[root]"


@dataclass(frozen=True)
class Property:
    """An object member, addressed by name."""

    name: str


@dataclass(frozen=True)
class Index:
    """An array item, addressed by ordinal."""

    ordinal: int


Segment = Property | Index


@dataclass(frozen=True)
class JsonPath:
    """An ordered sequence of segments locating a value within a JSON document.

    The empty path is the document root.  Paths compare equal when their
    segments do, whether they came from the validator or were built by hand.
    """

    segments: tuple[Segment, ...] = ()

    @classmethod
    def from_parts(cls, parts: Iterable[str | int]) -> JsonPath:
        """Build a path from ``jsonschema``-style parts (``str`` keys, ``int`` indices)."""
        segments: list[Segment] = []
        for part in parts:
            if isinstance(part, int) and not isinstance(part, bool):
                segments.append(Index(part))
            else:
                segments.append(Property(str(part)))
        return cls(tuple(segments))

    def __str__(self) -> str:
        """Render as a JSON Pointer."""
        out = []
        for segment in self.segments:
            if isinstance(segment, Property):
                out.append(segment.name.replace("~", "~0").replace("/", "~1"))
            else:
                out.append(str(segment.ordinal))
        return "".join(f"/{part}" for part in out)

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def last(self) -> Segment | None:
        return self.segments[-1] if self.segments else None

    def parent(self) -> JsonPath | None:
        """Return the path without its final segment, or ``None`` at the root."""
        if not self.segments:
            return None
        return JsonPath(self.segments[:-1])

    def child(self, segment: Segment | str | int) -> JsonPath:
        if isinstance(segment, (Property, Index)):
            return JsonPath((*self.segments, segment))
        return JsonPath((*self.segments, *JsonPath.from_parts([segment]).segments))

    def pointing_at(self) -> str:
        """Describe what this path points at: ``items[2]``, ``name`` or ``[root]``."""
        last = self.last
        if last is None:
            return ROOT_LABEL
        if isinstance(last, Property):
            return last.name
        parent = self.parent()
        if parent is None or not parent.segments:
            return f"[{last.ordinal}]"
        return f"{parent.pointing_at()}[{last.ordinal}]"

    def key_prefix(self) -> str:
        """The ``"key": `` text that precedes the value in :meth:`reconstruct`."""
        last = self.last
        if isinstance(last, Property):
            return f"{json.dumps(last.name, ensure_ascii=False)}: "
        return ""

    def reconstruct(self, value: Any) -> str:
        """Rebuild a single source-like line for *value* as found at this path.

        Property paths render as ``"key": <value>``; indices and the root
        render the value alone.  Multi-line values keep only their first line.
        """
        rendered = json.dumps(value, indent=2, ensure_ascii=False)
        lines = f"{self.key_prefix()}{rendered}".splitlines()
        return lines[0] if lines else ""


def resolve(tree: PositionedNode | None, path: JsonPath) -> PositionedNode | None:
    """Walk *tree* along *path*; ``None`` when any segment does not apply."""
    node = tree
    for segment in path.segments:
        if node is None:
            return None
        if isinstance(segment, Property):
            node = node.get(segment.name)
        else:
            node = node.at(segment.ordinal)
    return node


def underline_range(source: str, prefix_length: int | None = None) -> UnderlineRange:
    """Pick the part of a reconstructed line to underline.

    The underline covers the value after the ``"key": `` prefix, or the whole
    line when there is none.  Pass *prefix_length* (the length of
    :meth:`JsonPath.key_prefix`) when known; otherwise the prefix is taken to
    end at the first ``": "``, which is wrong for keys that contain one.
    """
    if prefix_length is None:
        separator = source.find(": ")
        prefix_length = separator + 2 if separator != -1 else 0
    start = min(prefix_length, len(source))
    return UnderlineRange(start=start, end=len(source))
