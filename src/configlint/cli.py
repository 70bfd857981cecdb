"""Command line front-end: lint arbitrary files, or manage an application's config."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from configlint import __version__
from configlint.config.base import ConfigFile
from configlint.config.commands import (
    config_schema,
    init_config,
    lint_config,
    reset_config,
    update_config,
)
from configlint.config.errors import ConfigError, ConfigValidationError
from configlint.config.loader import load_document
from configlint.config.registry import SchemaRegistry, UnknownVersionError
from configlint.diagnostics.render import ErrorStackStyle, render_errors, render_report
from configlint.settings import Settings
from configlint.style import OutputFormat

logger = logging.getLogger("configlint.cli")


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _add_output_options(parser: argparse.ArgumentParser, settings: Settings) -> None:
    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=settings.output_format.value,
        help="Report style (default: %(default)s)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")


def _setup_logging(settings: Settings, verbose: bool) -> None:
    level = "DEBUG" if verbose else settings.log_level
    logging.basicConfig(level=level.upper())


def _report_failure(operation: str, exc: Exception, fmt: OutputFormat, verbose: bool) -> None:
    """Print a diagnostic report for schema violations, a cause chain otherwise."""
    if isinstance(exc, ConfigValidationError):
        print(render_errors(exc.errors, fmt))
        return
    layout = ErrorStackStyle.STACKED if verbose else ErrorStackStyle.INLINE
    print(render_report(operation, exc, layout=layout, output_format=fmt))


def _parse_schema_option(value: str) -> tuple[str, Path]:
    version, sep, path = value.partition("=")
    if not sep or not version or not path:
        raise argparse.ArgumentTypeError(f"expected VERSION=PATH, got '{value}'")
    return version, Path(path)


# ---------------------------------------------------------------------------
# Standalone linter
# ---------------------------------------------------------------------------


def build_parser(settings: Settings | None = None) -> argparse.ArgumentParser:
    settings = settings or Settings()
    parser = argparse.ArgumentParser(
        prog="configlint",
        description="Validate versioned JSON config files against JSON Schemas",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lint = subparsers.add_parser("lint", help="Validate a config file and report problems")
    lint.add_argument("file", type=Path, help="JSON file to validate")
    lint.add_argument(
        "--schema",
        dest="schemas",
        action="append",
        type=_parse_schema_option,
        required=True,
        metavar="VERSION=PATH",
        help="Schema file for one version (repeatable)",
    )
    lint.add_argument(
        "--version-field",
        default="_version",
        help="Top-level field naming the schema version (default: %(default)s)",
    )
    _add_output_options(lint, settings)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the standalone ``configlint`` command.  Returns the exit status."""
    settings = Settings()
    args = build_parser(settings).parse_args(argv)
    _setup_logging(settings, args.verbose)
    fmt = OutputFormat(args.format)

    registry = SchemaRegistry(version_field=args.version_field)
    for version, schema_path in args.schemas:
        try:
            registry.register_schema(version, schema_path.read_bytes())
        except (OSError, ValueError) as exc:
            _report_failure(f"load schema {schema_path}", exc, fmt, args.verbose)
            return 1

    try:
        loaded = load_document([args.file], registry)
    except ConfigError as exc:
        _report_failure(f"lint {args.file}", exc, fmt, args.verbose)
        return 1
    logger.info("%s is valid (version %s)", loaded.path, loaded.entry.version)
    return 0


# ---------------------------------------------------------------------------
# Embedded config commands
# ---------------------------------------------------------------------------


def build_config_parser(
    prog: str | None = None, settings: Settings | None = None
) -> argparse.ArgumentParser:
    settings = settings or Settings()
    parser = argparse.ArgumentParser(prog=prog, description="Manage the application config")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("init", help="Initialise the config if one does not exist")
    subparsers.add_parser("reset", help="Replace the config with the default one")
    schema = subparsers.add_parser("schema", help="Print the config JSON schema")
    schema.add_argument("--schema-version", help="Version to print (default: latest)")
    subparsers.add_parser("lint", help="Validate the config")
    subparsers.add_parser("update", help="Migrate the config to the latest version")
    _add_output_options(parser, settings)
    return parser


def run_config_command(
    config_file: ConfigFile,
    argv: Sequence[str] | None = None,
    prog: str | None = None,
) -> int:
    """Give an application ``init``/``reset``/``schema``/``lint``/``update`` commands."""
    settings = Settings()
    args = build_config_parser(prog, settings).parse_args(argv)
    _setup_logging(settings, args.verbose)
    fmt = OutputFormat(args.format)

    try:
        match args.command:
            case "init":
                init_config(config_file)
                print(f"initialised config at {config_file.canonical_path}")
            case "reset":
                reset_config(config_file)
                print(f"reset config at {config_file.canonical_path}")
            case "schema":
                print(config_schema(config_file, args.schema_version))
            case "lint":
                lint_config(config_file)
                print("config is valid")
            case "update":
                config, changed = update_config(config_file)
                if changed:
                    print(f"updated config to version {config.version}")
                else:
                    print(f"config is already at version {config.version}")
    except (ConfigError, UnknownVersionError) as exc:
        _report_failure(f"config {args.command}", exc, fmt, args.verbose)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
