"""Config load pipeline: discover, read, parse, resolve the schema, validate, deserialize."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError as ModelValidationError

from configlint.config.base import ConfigFile, VersionedConfig
from configlint.config.errors import (
    ConfigNotFoundError,
    ConfigReadError,
    ConfigSyntaxError,
    ConfigValidationError,
    ConfigVersionError,
    VersionErrorKind,
)
from configlint.config.registry import SchemaEntry, SchemaRegistry, UnknownVersionError
from configlint.diagnostics.validate import ValidationErrors, validate
from configlint.parser.positioned import parse

logger = logging.getLogger("configlint.config")


@dataclass
class LoadedDocument:
    """A document that passed its schema, before typed deserialization."""

    path: Path
    document: Any
    entry: SchemaEntry


def discover(paths: Sequence[Path | str]) -> Path:
    """Return the first candidate that exists.

    Raises ``ConfigNotFoundError`` naming the last candidate, which is the
    canonical location.
    """
    if not paths:
        raise ValueError("at least one candidate path is required")
    candidates = [Path(p) for p in paths]
    for path in candidates:
        if path.exists():
            logger.debug("found config file %s", path)
            return path
    raise ConfigNotFoundError(candidates[-1])


def read_document(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(path) from exc


def parse_document(path: Path, text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigSyntaxError(path, exc.msg, exc.lineno, exc.colno) from exc
    except RecursionError as exc:
        raise ConfigSyntaxError(path, "document nesting is too deep", 1, 1) from exc


def resolve_schema(path: Path, document: Any, registry: SchemaRegistry) -> SchemaEntry:
    """Pick the schema named by the document's version field."""
    field = registry.version_field
    if not isinstance(document, dict) or field not in document:
        raise ConfigVersionError(path, VersionErrorKind.MISSING, field)
    version = document[field]
    if not isinstance(version, str):
        raise ConfigVersionError(path, VersionErrorKind.NOT_STRING, field, version)
    try:
        return registry.get(version)
    except UnknownVersionError as exc:
        raise ConfigVersionError(
            path, VersionErrorKind.UNKNOWN, field, version, exc.available
        ) from exc


def load_document(paths: Sequence[Path | str], registry: SchemaRegistry) -> LoadedDocument:
    """Run the pipeline up to and including schema validation."""
    path = discover(paths)
    text = read_document(path)
    document = parse_document(path, text)
    entry = resolve_schema(path, document, registry)
    logger.debug("validating %s against schema version %s", path, entry.version)

    positioned = parse(text)
    if positioned is None:
        logger.warning("source positions unavailable for %s", path)
    try:
        validate(entry.schema, document, positioned, path)
    except ValidationErrors as exc:
        raise ConfigValidationError(exc, path) from exc
    return LoadedDocument(path=path, document=document, entry=entry)


def deserialize(loaded: LoadedDocument) -> VersionedConfig:
    """Build the typed config from a document that passed its schema."""
    model = loaded.entry.model
    if model is None:
        raise TypeError(f"version '{loaded.entry.version}' has no config model registered")
    try:
        return model.model_validate(loaded.document)
    except ModelValidationError as exc:
        raise RuntimeError(
            f"{loaded.path} passed schema version {loaded.entry.version} "
            f"but does not fit {model.__name__}"
        ) from exc


def load_config(config_file: ConfigFile) -> VersionedConfig:
    """Load, validate and deserialize the config described by *config_file*.

    Raises a ``ConfigError`` subclass for the first step that fails; schema
    violations are all reported together in ``ConfigValidationError.errors``.
    """
    loaded = load_document(config_file.paths, config_file.registry)
    config = deserialize(loaded)
    logger.debug("loaded config version %s from %s", config.version, loaded.path)
    return config
