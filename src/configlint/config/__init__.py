"""Versioned config files: registry, load pipeline and lifecycle commands."""

from configlint.config.base import ConfigFile, VersionedConfig
from configlint.config.commands import (
    config_schema,
    init_config,
    lint_config,
    reset_config,
    update_config,
)
from configlint.config.errors import (
    AlreadyInitialisedError,
    ConfigDeleteError,
    ConfigError,
    ConfigNotFoundError,
    ConfigReadError,
    ConfigSyntaxError,
    ConfigValidationError,
    ConfigVersionError,
    ConfigWriteError,
    LoadErrorKind,
    VersionErrorKind,
)
from configlint.config.loader import load_config, load_document
from configlint.config.registry import SchemaEntry, SchemaRegistry, UnknownVersionError

__all__ = [
    "AlreadyInitialisedError",
    "ConfigDeleteError",
    "ConfigError",
    "ConfigFile",
    "ConfigNotFoundError",
    "ConfigReadError",
    "ConfigSyntaxError",
    "ConfigValidationError",
    "ConfigVersionError",
    "ConfigWriteError",
    "LoadErrorKind",
    "SchemaEntry",
    "SchemaRegistry",
    "UnknownVersionError",
    "VersionErrorKind",
    "VersionedConfig",
    "config_schema",
    "init_config",
    "lint_config",
    "load_config",
    "load_document",
    "reset_config",
    "update_config",
]
