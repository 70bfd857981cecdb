"""Render problems as compiler-style diagnostics, and errors as cause chains."""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum

from configlint.diagnostics.problem import ValidationProblem
from configlint.diagnostics.validate import ValidationErrors
from configlint.style import OutputFormat


def _gutter_width(problem: ValidationProblem) -> int:
    line = problem.line
    return len(str(line)) if line is not None else 1


def render_problem(
    problem: ValidationProblem, output_format: OutputFormat = OutputFormat.PLAIN
) -> str:
    """Render one problem::

        error: value out of range for 'count'
         --> config.json:3:12
          |
        3 | "count": -1
          |          ^^ this must be at least 0
          |
          = note: this should be the number of workers

    Every line shares the same gutter width: the digit count of the source
    line number, or 1 when the position is unknown.
    """
    fmt = output_format
    width = _gutter_width(problem)
    pad = " " * width

    lines = [
        fmt.error("error") + fmt.emphasis(f": {problem.headline} '{problem.pointing_at}'")
    ]
    if problem.location is not None:
        lines.append(f"{pad}{fmt.symbol('-->')} {problem.location}")
    lines.append(pad + fmt.symbol(" |"))

    gutter = str(problem.line) if problem.line is not None else pad
    lines.append(fmt.symbol(f"{gutter} |") + f" {problem.source}")

    underline = "^" * len(problem.range)
    lines.append(
        pad
        + fmt.symbol(" |")
        + " "
        + " " * problem.range.start
        + fmt.error(f"{underline} {problem.message}")
    )

    if problem.notes:
        lines.append(pad + fmt.symbol(" |"))
        for note in problem.notes:
            lines.append(f"{pad}{fmt.symbol(' =')} {fmt.emphasis('note:')} {note}")

    return "\n".join(lines)


def render_errors(
    errors: ValidationErrors, output_format: OutputFormat = OutputFormat.PLAIN
) -> str:
    """Render every problem followed by the ``generated N errors`` summary."""
    blocks = [render_problem(problem, output_format) for problem in errors.problems]
    blocks.append(errors.summary)
    return "\n\n".join(blocks)


# ---------------------------------------------------------------------------
# Error chains
# ---------------------------------------------------------------------------


class ErrorStackStyle(StrEnum):
    """Layout for an exception and its causes."""

    STACKED = "stacked"
    INLINE = "inline"


def _chain(error: BaseException) -> Iterator[BaseException]:
    current: BaseException | None = error
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


def render_report(
    operation: str,
    error: BaseException,
    layout: ErrorStackStyle = ErrorStackStyle.STACKED,
    output_format: OutputFormat = OutputFormat.PLAIN,
) -> str:
    """Describe a failed *operation* as its numbered chain of causes.

    A :class:`ValidationErrors` anywhere in the chain is expanded into its
    full diagnostic report.
    """
    fmt = output_format
    entries = []
    for index, cause in enumerate(_chain(error), start=1):
        if isinstance(cause, ValidationErrors):
            text = render_errors(cause, fmt)
        else:
            text = str(cause) or type(cause).__name__
        if layout is ErrorStackStyle.INLINE:
            entries.append(f" ----- {index}. {text}")
        else:
            entries.append(f"  {fmt.error(str(index))}{fmt.emphasis('.')} {text}")

    separator = "" if layout is ErrorStackStyle.INLINE else "\n"
    return f"`{operation}` reported an error\n" + separator.join(entries)
