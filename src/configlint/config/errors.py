"""Errors raised while loading, writing or migrating a config file."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from configlint.diagnostics.validate import ValidationErrors


class LoadErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    READ_FAILURE = "read_failure"
    SYNTAX_FAILURE = "syntax_failure"
    VERSION_FAILURE = "version_failure"
    VALIDATION_FAILURE = "validation_failure"
    WRITE_FAILURE = "write_failure"
    DELETE_FAILURE = "delete_failure"
    ALREADY_INITIALISED = "already_initialised"


class VersionErrorKind(StrEnum):
    MISSING = "missing"
    NOT_STRING = "not_string"
    UNKNOWN = "unknown"


class ConfigError(Exception):
    """Base class for config lifecycle failures.  ``kind`` tags the failure."""

    kind: LoadErrorKind

    def __init__(self, message: str, path: Path) -> None:
        self.path = path
        super().__init__(message)


class ConfigNotFoundError(ConfigError):
    """No candidate path exists.  ``path`` is the canonical (last) candidate."""

    kind = LoadErrorKind.NOT_FOUND

    def __init__(self, path: Path) -> None:
        super().__init__(f"config file `{path}` does not exist", path)


class ConfigReadError(ConfigError):
    kind = LoadErrorKind.READ_FAILURE

    def __init__(self, path: Path) -> None:
        super().__init__(f"could not read config file `{path}`", path)


class ConfigSyntaxError(ConfigError):
    """The file is not valid JSON."""

    kind = LoadErrorKind.SYNTAX_FAILURE

    def __init__(self, path: Path, detail: str, line: int, column: int) -> None:
        self.detail = detail
        self.line = line
        self.column = column
        super().__init__(
            f"config file `{path}` is not valid JSON: {detail} ({path}:{line}:{column})",
            path,
        )


class ConfigVersionError(ConfigError):
    """The ``_version`` field is missing, not a string, or not registered."""

    kind = LoadErrorKind.VERSION_FAILURE

    def __init__(
        self,
        path: Path,
        reason: VersionErrorKind,
        field: str,
        version: object = None,
        available: list[str] | None = None,
    ) -> None:
        self.reason = reason
        self.field = field
        self.version = version
        self.available = available or []
        match reason:
            case VersionErrorKind.MISSING:
                message = f"config file `{path}` has no `{field}` field"
            case VersionErrorKind.NOT_STRING:
                message = f"config file `{path}` has a non-string `{field}` field"
            case VersionErrorKind.UNKNOWN:
                message = (
                    f"config file `{path}` has unsupported version '{version}'. "
                    f"Available: {', '.join(self.available)}"
                )
        super().__init__(message, path)


class ConfigValidationError(ConfigError):
    """The document violates its schema.  ``errors`` holds every problem."""

    kind = LoadErrorKind.VALIDATION_FAILURE

    def __init__(self, errors: ValidationErrors, path: Path) -> None:
        self.errors = errors
        self.count = len(errors)
        super().__init__(
            f"config file `{path}` failed validation with {self.count} errors", path
        )


class ConfigWriteError(ConfigError):
    """Writing the config failed.

    ``data_lost`` is set when the previous file had already been deleted,
    leaving no config on disk; that state needs manual recovery.
    """

    kind = LoadErrorKind.WRITE_FAILURE

    def __init__(self, path: Path, data_lost: bool = False) -> None:
        self.data_lost = data_lost
        message = f"could not write config file `{path}`"
        if data_lost:
            message += " after deleting the previous file; no config remains on disk"
        super().__init__(message, path)


class ConfigDeleteError(ConfigError):
    kind = LoadErrorKind.DELETE_FAILURE

    def __init__(self, path: Path) -> None:
        super().__init__(f"could not delete config file `{path}`", path)


class AlreadyInitialisedError(ConfigError):
    kind = LoadErrorKind.ALREADY_INITIALISED

    def __init__(self, path: Path) -> None:
        super().__init__(f"the config is already initialised at `{path}`", path)
