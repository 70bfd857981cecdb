"""Config lifecycle operations: init, reset, schema, lint and update."""

from __future__ import annotations

import json
import logging

from configlint.config.base import ConfigFile, VersionedConfig
from configlint.config.errors import AlreadyInitialisedError
from configlint.config.loader import deserialize, load_config, load_document

logger = logging.getLogger("configlint.config")


def init_config(config_file: ConfigFile) -> VersionedConfig:
    """Write the default config unless one already exists."""
    existing = config_file.existing_path()
    if existing is not None:
        raise AlreadyInitialisedError(existing)
    config = config_file.default_config()
    config_file.write(config)
    return config


def reset_config(config_file: ConfigFile) -> VersionedConfig:
    """Replace the canonical config with the default one."""
    if config_file.canonical_path.exists():
        config_file.delete()
    config = config_file.default_config()
    config_file.write(config)
    return config


def config_schema(config_file: ConfigFile, version: str | None = None) -> str:
    """Pretty JSON of the schema for *version* (the latest by default)."""
    registry = config_file.registry
    entry = registry.get(version) if version is not None else registry.latest
    return json.dumps(entry.schema, indent=2, ensure_ascii=False)


def lint_config(config_file: ConfigFile) -> VersionedConfig:
    """Load the config purely to surface its problems."""
    return load_config(config_file)


def migrate_to_latest(config: VersionedConfig, max_steps: int) -> tuple[VersionedConfig, bool]:
    """Apply ``migrate`` until a version reports no change."""
    changed = False
    for _ in range(max_steps):
        config, stepped = config.migrate()
        if not stepped:
            break
        changed = True
        logger.debug("migrated config to version %s", config.version)
    return config, changed


def update_config(config_file: ConfigFile) -> tuple[VersionedConfig, bool]:
    """Load the config and rewrite it in the latest version if it is older.

    The old file is deleted before the new one is written; the two steps are
    not atomic.  A write failure after the delete raises ``ConfigWriteError``
    with ``data_lost`` set.
    """
    loaded = load_document(config_file.paths, config_file.registry)
    config = deserialize(loaded)
    latest, changed = migrate_to_latest(config, max_steps=len(config_file.registry))
    if not changed:
        return config, False

    logger.info(
        "updating %s from version %s to %s", loaded.path, config.version, latest.version
    )
    config_file.delete(loaded.path)
    config_file.write(latest, after_delete=True)
    return latest, True
