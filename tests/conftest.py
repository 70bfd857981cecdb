"""Shared test fixtures for configlint."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from configlint.config.base import ConfigFile
from configlint.config.registry import SchemaRegistry
from tests.sample_configs import ServiceConfigV1, ServiceConfigV2

SERVICE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "description": "Service settings.",
    "properties": {
        "_version": {"type": "string"},
        "name": {"type": "string"},
        "count": {
            "type": "integer",
            "minimum": 0,
            "description": "How many workers to run.\nTry `0` to disable workers.",
        },
        "tags": {"type": "array", "items": {"type": "string"}},
    },
    "additionalProperties": False,
}

NAMED_SCHEMA: dict[str, Any] = {**SERVICE_SCHEMA, "required": ["_version", "name"]}

SAMPLE_DOCUMENT = """\
{
  "_version": "v1",
  "name": "api",
  "count": -1,
  "tags": ["a", 3]
}
"""


def failures(schema: Any, instance: Any) -> list[ValidationError]:
    """Raw failures from the engine, the same way the validator builds them."""
    validator = Draft202012Validator(schema, format_checker=Draft202012Validator.FORMAT_CHECKER)
    return list(validator.iter_errors(instance))


def write_json(path: Path, document: Any) -> Path:
    path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def registry() -> SchemaRegistry:
    registry = SchemaRegistry()
    registry.register(ServiceConfigV1)
    registry.register(ServiceConfigV2)
    return registry


@pytest.fixture
def config_file(tmp_path: Path, registry: SchemaRegistry) -> ConfigFile:
    """Two candidates: a local override and the canonical location."""
    return ConfigFile(
        paths=[tmp_path / "local.json", tmp_path / "config" / "service.json"],
        registry=registry,
    )
