"""Schema registry: maps a document's declared version to its JSON Schema."""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from configlint.config.base import VersionedConfig

VERSION_FIELD = "_version"


class UnknownVersionError(Exception):
    """Raised when a requested version is not registered."""

    def __init__(self, version: str, available: list[str]) -> None:
        self.version = version
        self.available = available
        super().__init__(f"Unsupported version '{version}'. Available: {', '.join(available)}")


@dataclass(frozen=True)
class SchemaEntry:
    """One supported version: its schema and, when typed, its config model."""

    version: str
    raw_schema: str
    model: type[VersionedConfig] | None = None

    @property
    def schema(self) -> dict[str, Any]:
        """A fresh copy of the schema document; the registered one never changes."""
        return json.loads(self.raw_schema)


def _schema_text(schema: bytes | str | Mapping[str, Any] | bool) -> str:
    if isinstance(schema, bytes):
        schema = schema.decode("utf-8")
    if isinstance(schema, str):
        return json.dumps(json.loads(schema))
    return json.dumps(copy.deepcopy(schema))


class SchemaRegistry:
    """Versions a config type understands, in registration order.

    The most recently registered version is the latest one, which new
    configs are written in and migrations end at.
    """

    def __init__(self, version_field: str = VERSION_FIELD) -> None:
        self.version_field = version_field
        self._entries: dict[str, SchemaEntry] = {}

    def register(
        self,
        model: type[VersionedConfig],
        schema: bytes | str | Mapping[str, Any] | None = None,
    ) -> type[VersionedConfig]:
        """Register a config model.  Can be used as a decorator.

        The schema defaults to the one pydantic generates for *model*.
        """
        version = model.version_tag()
        if schema is None:
            schema = model.model_json_schema(by_alias=True)
        self._add(SchemaEntry(version=version, raw_schema=_schema_text(schema), model=model))
        return model

    def register_schema(self, version: str, schema: bytes | str | Mapping[str, Any]) -> None:
        """Register a bare schema with no typed model (lint-only use)."""
        self._add(SchemaEntry(version=version, raw_schema=_schema_text(schema)))

    def _add(self, entry: SchemaEntry) -> None:
        if entry.version in self._entries:
            raise ValueError(f"Version '{entry.version}' is already registered")
        self._entries[entry.version] = entry

    def get(self, version: str) -> SchemaEntry:
        """Get the entry for *version*."""
        if version not in self._entries:
            raise UnknownVersionError(version, available=self.available())
        return self._entries[version]

    def available(self) -> list[str]:
        """List registered versions, oldest first."""
        return list(self._entries)

    @property
    def latest(self) -> SchemaEntry:
        if not self._entries:
            raise LookupError("No versions are registered")
        return next(reversed(self._entries.values()))

    def __contains__(self, version: object) -> bool:
        return version in self._entries

    def __len__(self) -> int:
        return len(self._entries)
