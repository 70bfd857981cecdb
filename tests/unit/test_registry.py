"""Tests for the schema registry and versioned config models."""

from __future__ import annotations

import json
from typing import Literal

import pytest
from pydantic import Field

from configlint.config.base import VersionedConfig
from configlint.config.registry import SchemaRegistry, UnknownVersionError
from tests.conftest import SERVICE_SCHEMA
from tests.sample_configs import ServiceConfigV1, ServiceConfigV2


class TestSchemaRegistry:
    def test_registration_order(self, registry: SchemaRegistry) -> None:
        assert registry.available() == ["v1", "v2"]
        assert registry.latest.version == "v2"
        assert registry.latest.model is ServiceConfigV2
        assert len(registry) == 2
        assert "v1" in registry
        assert "v3" not in registry

    def test_unknown_version(self, registry: SchemaRegistry) -> None:
        with pytest.raises(UnknownVersionError, match="'v9'. Available: v1, v2"):
            registry.get("v9")

    def test_duplicate_version(self, registry: SchemaRegistry) -> None:
        with pytest.raises(ValueError, match="already registered"):
            registry.register(ServiceConfigV1)

    def test_empty_registry_has_no_latest(self) -> None:
        with pytest.raises(LookupError):
            SchemaRegistry().latest

    def test_schema_is_a_fresh_copy(self, registry: SchemaRegistry) -> None:
        schema = registry.get("v1").schema
        schema["properties"].clear()
        assert registry.get("v1").schema["properties"]

    def test_register_bare_schema(self) -> None:
        registry = SchemaRegistry(version_field="schemaVersion")
        registry.register_schema("2024-01", json.dumps(SERVICE_SCHEMA).encode())
        entry = registry.get("2024-01")
        assert entry.model is None
        assert entry.schema == SERVICE_SCHEMA
        assert registry.version_field == "schemaVersion"

    def test_registered_schema_is_not_shared(self) -> None:
        schema = {"type": "object"}
        registry = SchemaRegistry()
        registry.register_schema("v1", schema)
        schema["type"] = "array"
        assert registry.get("v1").schema == {"type": "object"}

    def test_register_as_decorator(self) -> None:
        registry = SchemaRegistry()

        @registry.register
        class Minimal(VersionedConfig):
            version: Literal["m1"] = Field("m1", alias="_version")

        assert registry.get("m1").model is Minimal


class TestVersionedConfig:
    def test_generated_schema(self, registry: SchemaRegistry) -> None:
        schema = registry.get("v1").schema
        assert schema["additionalProperties"] is False
        assert "_version" in schema["properties"]
        count = schema["properties"]["count"]
        assert count["minimum"] == 0
        assert count["description"].startswith("How many workers to run.")

    def test_version_tag(self) -> None:
        assert ServiceConfigV1.version_tag() == "v1"
        assert ServiceConfigV2.version_tag() == "v2"

    def test_version_without_default(self) -> None:
        class Untagged(VersionedConfig):
            pass

        with pytest.raises(TypeError, match="string default"):
            Untagged.version_tag()

    def test_migrate(self) -> None:
        migrated, changed = ServiceConfigV1(name="api", count=4).migrate()
        assert changed
        assert isinstance(migrated, ServiceConfigV2)
        assert migrated.workers == 4

        latest, changed = migrated.migrate()
        assert not changed
        assert latest is migrated

    def test_to_json_uses_alias(self) -> None:
        document = json.loads(ServiceConfigV2().to_json())
        assert document == {"_version": "v2", "name": "service", "workers": 1, "tags": []}
