"""Schema validation diagnostics: problems, messages and rendering."""

from configlint.diagnostics.problem import ValidationProblem, build_problem, problem_kind
from configlint.diagnostics.render import (
    ErrorStackStyle,
    render_errors,
    render_problem,
    render_report,
)
from configlint.diagnostics.validate import ValidationErrors, validate

__all__ = [
    "ErrorStackStyle",
    "ValidationErrors",
    "ValidationProblem",
    "build_problem",
    "problem_kind",
    "render_errors",
    "render_problem",
    "render_report",
    "validate",
]
