"""End-to-end tests for loading, initialising and migrating config files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from configlint.config.base import ConfigFile
from configlint.config.commands import (
    config_schema,
    init_config,
    lint_config,
    migrate_to_latest,
    reset_config,
    update_config,
)
from configlint.config.errors import (
    AlreadyInitialisedError,
    ConfigNotFoundError,
    ConfigReadError,
    ConfigSyntaxError,
    ConfigValidationError,
    ConfigVersionError,
    ConfigWriteError,
    LoadErrorKind,
    VersionErrorKind,
)
from configlint.config.loader import deserialize, load_config, load_document
from configlint.config.registry import SchemaRegistry, UnknownVersionError
from tests.conftest import write_json
from tests.sample_configs import ServiceConfigV1, ServiceConfigV2


class TestLoadConfig:
    def test_missing_file_names_canonical_path(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, registry: SchemaRegistry
    ) -> None:
        monkeypatch.chdir(tmp_path)
        config_file = ConfigFile(paths=[Path("./a.json"), Path("./b.json")], registry=registry)
        with pytest.raises(ConfigNotFoundError) as excinfo:
            load_config(config_file)
        assert excinfo.value.path == Path("./b.json")
        assert excinfo.value.kind is LoadErrorKind.NOT_FOUND
        assert "does not exist" in str(excinfo.value)

    def test_valid_config(
        self, config_file: ConfigFile, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config_file.canonical_path.parent.mkdir(parents=True)
        write_json(config_file.canonical_path, {"_version": "v2", "name": "api", "workers": 2})

        config = load_config(config_file)

        assert isinstance(config, ServiceConfigV2)
        assert config.workers == 2
        assert capsys.readouterr().out == ""

    def test_first_existing_candidate_wins(self, config_file: ConfigFile) -> None:
        local, canonical = config_file.paths
        canonical.parent.mkdir(parents=True)
        write_json(canonical, {"_version": "v2", "name": "canonical"})
        write_json(local, {"_version": "v1", "name": "local"})

        config = load_config(config_file)

        assert isinstance(config, ServiceConfigV1)
        assert config.name == "local"

    def test_older_version_loads_without_migration(self, config_file: ConfigFile) -> None:
        local = config_file.paths[0]
        write_json(local, {"_version": "v1", "count": 3})
        config = load_config(config_file)
        assert isinstance(config, ServiceConfigV1)
        assert config.count == 3

    def test_unreadable_file(self, config_file: ConfigFile) -> None:
        config_file.paths[0].mkdir()
        with pytest.raises(ConfigReadError) as excinfo:
            load_config(config_file)
        assert excinfo.value.kind is LoadErrorKind.READ_FAILURE

    def test_invalid_utf8(self, config_file: ConfigFile) -> None:
        config_file.paths[0].write_bytes(b'{"_version": "\xff"}')
        with pytest.raises(ConfigReadError):
            load_config(config_file)

    def test_syntax_error(self, config_file: ConfigFile) -> None:
        config_file.paths[0].write_text('{\n  "_version": "v1",\n}\n', encoding="utf-8")
        with pytest.raises(ConfigSyntaxError) as excinfo:
            load_config(config_file)
        assert excinfo.value.kind is LoadErrorKind.SYNTAX_FAILURE
        assert excinfo.value.line == 3
        assert excinfo.value.column == 1

    def test_nesting_beyond_the_decoder_limit(self, config_file: ConfigFile) -> None:
        depth = 50_000
        config_file.paths[0].write_text(
            '{"_version": "v1", "x": ' + "[" * depth + "]" * depth + "}", encoding="utf-8"
        )
        with pytest.raises(ConfigSyntaxError, match="nesting is too deep") as excinfo:
            load_config(config_file)
        assert excinfo.value.kind is LoadErrorKind.SYNTAX_FAILURE
        assert isinstance(excinfo.value.__cause__, RecursionError)

    def test_string_candidates(self, tmp_path: Path, registry: SchemaRegistry) -> None:
        path = write_json(tmp_path / "c.json", {"_version": "v1"})
        loaded = load_document([str(tmp_path / "absent.json"), str(path)], registry)
        assert loaded.path == path
        with pytest.raises(ConfigNotFoundError) as excinfo:
            load_document([str(tmp_path / "absent.json")], registry)
        assert excinfo.value.path == tmp_path / "absent.json"


class TestVersionGate:
    def test_missing_version_skips_registry(
        self, config_file: ConfigFile, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fail(version: str) -> None:
            raise AssertionError("the registry must not be consulted")

        monkeypatch.setattr(config_file.registry, "get", fail)
        write_json(config_file.paths[0], {"name": "api"})

        with pytest.raises(ConfigVersionError) as excinfo:
            load_config(config_file)
        assert excinfo.value.reason is VersionErrorKind.MISSING
        assert excinfo.value.kind is LoadErrorKind.VERSION_FAILURE

    def test_non_object_document(self, config_file: ConfigFile) -> None:
        write_json(config_file.paths[0], ["v1"])
        with pytest.raises(ConfigVersionError) as excinfo:
            load_config(config_file)
        assert excinfo.value.reason is VersionErrorKind.MISSING

    def test_version_not_a_string(self, config_file: ConfigFile) -> None:
        write_json(config_file.paths[0], {"_version": 1})
        with pytest.raises(ConfigVersionError) as excinfo:
            load_config(config_file)
        assert excinfo.value.reason is VersionErrorKind.NOT_STRING

    def test_unknown_version(self, config_file: ConfigFile) -> None:
        write_json(config_file.paths[0], {"_version": "v9"})
        with pytest.raises(ConfigVersionError, match="unsupported version 'v9'") as excinfo:
            load_config(config_file)
        assert excinfo.value.reason is VersionErrorKind.UNKNOWN
        assert excinfo.value.available == ["v1", "v2"]
        assert isinstance(excinfo.value.__cause__, UnknownVersionError)


class TestValidationFailure:
    def test_every_problem_is_reported(self, config_file: ConfigFile) -> None:
        path = config_file.paths[0]
        path.write_text(
            '{\n  "_version": "v2",\n  "workers": -1,\n'
            '  "tags": ["a", 3],\n  "extra": true\n}\n',
            encoding="utf-8",
        )

        with pytest.raises(ConfigValidationError) as excinfo:
            load_config(config_file)

        exc = excinfo.value
        assert exc.kind is LoadErrorKind.VALIDATION_FAILURE
        assert exc.count == 3
        assert exc.path == path
        lines = {p.pointing_at: p.line for p in exc.errors.problems}
        assert lines == {"workers": 3, "tags[1]": 4, "[root]": 1}

    def test_problems_without_positions_when_text_is_not_strict_json(
        self, config_file: ConfigFile
    ) -> None:
        config_file.paths[0].write_text('{"_version": "v2", "workers": NaN}', encoding="utf-8")

        with pytest.raises(ConfigValidationError) as excinfo:
            load_config(config_file)

        (problem,) = excinfo.value.errors.problems
        assert problem.pointing_at == "workers"
        assert problem.location is None


class TestDeserialize:
    def test_schema_and_model_disagree(self, tmp_path: Path) -> None:
        registry = SchemaRegistry()
        registry.register(ServiceConfigV2, schema={"type": "object"})
        path = write_json(tmp_path / "c.json", {"_version": "v2", "workers": "many"})

        with pytest.raises(RuntimeError, match="does not fit ServiceConfigV2"):
            deserialize(load_document([path], registry))

    def test_bare_schema_has_no_model(self, tmp_path: Path) -> None:
        registry = SchemaRegistry()
        registry.register_schema("v1", {"type": "object"})
        path = write_json(tmp_path / "c.json", {"_version": "v1"})

        with pytest.raises(TypeError, match="no config model"):
            deserialize(load_document([path], registry))


class TestCommands:
    def test_init_writes_default(self, config_file: ConfigFile) -> None:
        config = init_config(config_file)
        assert isinstance(config, ServiceConfigV2)
        written = json.loads(config_file.canonical_path.read_text(encoding="utf-8"))
        assert written["_version"] == "v2"
        assert load_config(config_file) == config

    def test_init_refuses_existing(self, config_file: ConfigFile) -> None:
        write_json(config_file.paths[0], {"_version": "v1"})
        with pytest.raises(AlreadyInitialisedError) as excinfo:
            init_config(config_file)
        assert excinfo.value.path == config_file.paths[0]
        assert not config_file.canonical_path.exists()

    def test_init_uses_default_factory(self, tmp_path: Path, registry: SchemaRegistry) -> None:
        config_file = ConfigFile(
            paths=[tmp_path / "c.json"],
            registry=registry,
            default=lambda: ServiceConfigV2(name="custom"),
        )
        assert init_config(config_file).name == "custom"

    def test_reset_replaces_broken_config(self, config_file: ConfigFile) -> None:
        config_file.canonical_path.parent.mkdir(parents=True)
        config_file.canonical_path.write_text("not json", encoding="utf-8")

        reset_config(config_file)

        assert isinstance(load_config(config_file), ServiceConfigV2)

    def test_lint(self, config_file: ConfigFile) -> None:
        write_json(config_file.paths[0], {"_version": "v1", "count": -5})
        with pytest.raises(ConfigValidationError):
            lint_config(config_file)

    def test_schema_defaults_to_latest(self, config_file: ConfigFile) -> None:
        latest = json.loads(config_schema(config_file))
        assert "workers" in latest["properties"]
        older = json.loads(config_schema(config_file, "v1"))
        assert "count" in older["properties"]

    def test_schema_unknown_version(self, config_file: ConfigFile) -> None:
        with pytest.raises(UnknownVersionError):
            config_schema(config_file, "v9")


class TestUpdate:
    def test_migrates_to_canonical_path(self, config_file: ConfigFile) -> None:
        local = write_json(config_file.paths[0], {"_version": "v1", "name": "api", "count": 4})

        config, changed = update_config(config_file)

        assert changed
        assert isinstance(config, ServiceConfigV2)
        assert config.workers == 4
        assert not local.exists()
        reloaded = load_config(config_file)
        assert reloaded == config

    def test_latest_is_left_alone(self, config_file: ConfigFile) -> None:
        config_file.canonical_path.parent.mkdir(parents=True)
        path = write_json(config_file.canonical_path, {"_version": "v2", "name": "api"})
        before = path.read_text(encoding="utf-8")

        config, changed = update_config(config_file)

        assert not changed
        assert config.name == "api"
        assert path.read_text(encoding="utf-8") == before

    def test_write_failure_after_delete_reports_data_loss(
        self, config_file: ConfigFile, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        local = write_json(config_file.paths[0], {"_version": "v1"})

        def refuse(self: Path, *args: object, **kwargs: object) -> int:
            raise OSError("read-only file system")

        monkeypatch.setattr(Path, "write_text", refuse)

        with pytest.raises(ConfigWriteError) as excinfo:
            update_config(config_file)
        assert excinfo.value.data_lost
        assert excinfo.value.kind is LoadErrorKind.WRITE_FAILURE
        assert not local.exists()

    def test_migration_stops_at_step_limit(self) -> None:
        config, changed = migrate_to_latest(ServiceConfigV1(), max_steps=0)
        assert not changed
        assert isinstance(config, ServiceConfigV1)
