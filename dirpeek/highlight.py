"""Syntax colouring and sanitization for text previews.

Neutralizes control characters row by row so previews cannot move the cursor
or ring the bell, and colours excerpts with Pygments when colour output is enabled.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def _escape_control(match: re.Match[str]) -> str:
    return f"\\x{ord(match.group(0)):02x}"


def sanitize_preview_row(row: str) -> str:
    """Escape control characters in one display row; only tabs pass through.

    Carriage returns and newlines are escaped too since a row is drawn in place
    inside a pane.
    """
    return _CONTROL_RE.sub(_escape_control, row)


def normalize_style(style: str) -> str:
    """Return ``style`` if Pygments knows it, else the default style."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_lines(lines: list[str], path: Path, style: str = DEFAULT_STYLE) -> list[str]:
    """Colour ``lines`` as a snippet of ``path``; returns one row per input line.

    Falls back to the plain lines when highlighting does not keep the row
    count intact.
    """
    if not lines:
        return []
    source = "\n".join(lines) + "\n"
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)

    rendered = pygments_highlight(source, lexer, _formatter_for_style(normalize_style(style)))
    rows = rendered.split("\n")
    if rows and rows[-1] == "":
        rows.pop()
    if len(rows) != len(lines):
        return list(lines)
    return rows


__all__ = [
    "DEFAULT_STYLE",
    "colorize_lines",
    "normalize_style",
    "sanitize_preview_row",
]
