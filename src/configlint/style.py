"""Output styling for diagnostic reports: plain text or ANSI styled."""

from __future__ import annotations

from enum import StrEnum

from rich.color import ColorSystem
from rich.style import Style

_ERROR_STYLE = Style(bold=True, color="bright_red")
_SYMBOL_STYLE = Style(bold=True, color="bright_cyan")
_EMPHASIS_STYLE = Style(bold=True)

_TRAILING_PUNCTUATION = (".", "?", "!")


class OutputFormat(StrEnum):
    """How a report is decorated.  One value is used for a whole report."""

    PLAIN = "plain"
    STYLED = "styled"

    def _paint(self, text: str, style: Style) -> str:
        if self is OutputFormat.PLAIN or not text:
            return text
        return style.render(text, color_system=ColorSystem.STANDARD)

    def error(self, text: str) -> str:
        """Decorate the ``error`` keyword, underlines and their messages."""
        return self._paint(text, _ERROR_STYLE)

    def symbol(self, text: str) -> str:
        """Decorate gutter symbols and line numbers."""
        return self._paint(text, _SYMBOL_STYLE)

    def emphasis(self, text: str) -> str:
        return self._paint(text, _EMPHASIS_STYLE)


def normalize_note(message: str, *, lowercase_first: bool = True) -> str:
    """Trim *message*, lowercase its first letter and drop one trailing ``.``/``?``/``!``.

    >>> normalize_note("  A positive number. ")
    'a positive number'
    """
    text = message.strip()
    if text.endswith(_TRAILING_PUNCTUATION):
        text = text[:-1]
    if lowercase_first and text:
        text = text[0].lower() + text[1:]
    return text
