"""Run JSON Schema validation and collect every failure as a located problem."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jsonschema.exceptions import ValidationError
from jsonschema.validators import validator_for
from referencing.exceptions import Unresolvable

from configlint.diagnostics.problem import ValidationProblem, build_problem
from configlint.parser.positioned import PositionedNode

logger = logging.getLogger("configlint.diagnostics")


class ValidationErrors(Exception):
    """Every problem found in one validated document.

    ``str()`` gives the one-line summary; use
    :func:`configlint.diagnostics.render.render_errors` for the full report.
    """

    def __init__(self, problems: list[ValidationProblem], file_path: Path | None = None) -> None:
        self.problems = problems
        self.file_path = file_path
        super().__init__(self.summary)

    @property
    def summary(self) -> str:
        name = str(self.file_path) if self.file_path is not None else "JSON"
        return f"`{name}` generated {len(self.problems)} errors"

    def __len__(self) -> int:
        return len(self.problems)


def _iter_failures(schema: Any, instance: Any) -> list[ValidationError]:
    """All engine failures in order; an unresolvable ``$ref`` ends the stream."""
    validator_cls = validator_for(schema)
    validator = validator_cls(schema, format_checker=validator_cls.FORMAT_CHECKER)
    failures: list[ValidationError] = []
    try:
        for error in validator.iter_errors(instance):
            failures.append(error)
    except Unresolvable as exc:
        logger.warning("schema reference could not be resolved: %s", exc)
        failures.append(
            ValidationError(
                str(exc),
                validator="$ref",
                validator_value=getattr(exc, "ref", None),
                instance=instance,
                schema=schema,
            )
        )
    return failures


def validate(
    schema: Any,
    instance: Any,
    document: PositionedNode | None = None,
    file_path: Path | None = None,
) -> None:
    """Validate *instance* against *schema*.

    Raises :class:`ValidationErrors` carrying one problem per failure.  The
    draft is picked from the schema's ``$schema`` (Draft 2020-12 when absent).
    """
    failures = _iter_failures(schema, instance)
    if not failures:
        return
    problems = [build_problem(error, schema, document, file_path) for error in failures]
    logger.debug("validation found %d problem(s) in %s", len(problems), file_path or "JSON")
    raise ValidationErrors(problems, file_path)
