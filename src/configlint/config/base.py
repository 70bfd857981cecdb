"""Versioned config models and the file layout they are stored in."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from configlint.config.errors import ConfigDeleteError, ConfigWriteError
from configlint.config.registry import SchemaRegistry

logger = logging.getLogger("configlint.config")


class VersionedConfig(BaseModel):
    """Base for one version of a config document.

    Subclasses declare the version they accept with a single-value field::

        class AppConfigV1(VersionedConfig):
            version: Literal["v1"] = Field("v1", alias="_version")

    Attribute docstrings become schema descriptions, which diagnostics show
    as notes.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        use_attribute_docstrings=True,
    )

    version: str

    @classmethod
    def version_tag(cls) -> str:
        default = cls.model_fields["version"].default
        if not isinstance(default, str):
            raise TypeError(f"{cls.__name__} must give `version` a string default")
        return default

    def migrate(self) -> tuple[VersionedConfig, bool]:
        """Step towards the latest version: ``(new value, changed)``.

        The latest version returns itself unchanged.
        """
        return self, False

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2) + "\n"


@dataclass
class ConfigFile:
    """Where an application's config lives and which versions it understands.

    ``paths`` are tried in order when loading; the last one is canonical and
    is where configs are written.
    """

    paths: list[Path]
    registry: SchemaRegistry
    default: Callable[[], VersionedConfig] | None = None

    def __post_init__(self) -> None:
        if not self.paths:
            raise ValueError("ConfigFile needs at least one candidate path")
        self.paths = [Path(p) for p in self.paths]

    @property
    def canonical_path(self) -> Path:
        return self.paths[-1]

    def existing_path(self) -> Path | None:
        """The first candidate that exists, if any."""
        for path in self.paths:
            if path.exists():
                return path
        return None

    def default_config(self) -> VersionedConfig:
        if self.default is not None:
            return self.default()
        model = self.registry.latest.model
        if model is None:
            raise TypeError("The latest registered version has no config model")
        return model()

    def write(self, config: VersionedConfig, *, after_delete: bool = False) -> Path:
        """Overwrite the canonical file with *config*."""
        path = self.canonical_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(config.to_json(), encoding="utf-8")
        except OSError as exc:
            raise ConfigWriteError(path, data_lost=after_delete) from exc
        logger.info("wrote config version %s to %s", config.version, path)
        return path

    def delete(self, path: Path | None = None) -> None:
        target = path or self.canonical_path
        try:
            target.unlink()
        except OSError as exc:
            raise ConfigDeleteError(target) from exc
        logger.info("deleted config file %s", target)
