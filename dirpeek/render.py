"""Rendering for the split list/preview terminal view.

Composes a full ANSI frame from a ``FrameContext`` and writes it in one
call. Rendering reads state only; it never feeds back into navigation.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .ansi import display_width, fit_ansi_line
from .entries import Entry
from .highlight import sanitize_preview_row
from .viewport import visible_range

APP_TITLE = "< dirpeek >"
CHROME_ROWS = 2
BORDER_ROWS = 2

TITLE_SGR = "\033[1;32m"
PANE_TITLE_SGR = "\033[1;34m"
KEY_SGR = "\033[1;34m"
QUIT_KEY_SGR = "\033[1;31m"
SELECTED_SGR = "\033[1;37;44m"
STATUS_SGR = "\033[7m"
RESET = "\033[0m"


@dataclass
class FrameContext:
    current_dir: Path
    entries: list[Entry]
    selected_index: int
    scroll_offset: int
    width: int
    height: int
    preview_rows: list[str] = field(default_factory=list)
    status_message: str = ""
    no_color: bool = False


def list_visible_height(term_rows: int) -> int:
    """Return entry rows that fit in the list pane for a ``term_rows`` terminal."""
    return max(0, term_rows - CHROME_ROWS - BORDER_ROWS)


def pane_widths(width: int) -> tuple[int, int]:
    left = width // 2
    return left, width - left


def _styled(text: str, sgr: str, no_color: bool) -> str:
    if no_color or not text:
        return text
    return f"{sgr}{text}{RESET}"


def _centered(text: str, width: int) -> str:
    pad = max(0, (width - display_width(text)) // 2)
    return fit_ansi_line(" " * pad + text, width)


def _instructions_line(no_color: bool) -> str:
    return "".join(
        [
            " Up/Down ",
            _styled("<↑/↓>", KEY_SGR, no_color),
            " Enter ",
            _styled("<↵>", KEY_SGR, no_color),
            " Quit ",
            _styled("<Q>", QUIT_KEY_SGR, no_color),
            " ",
        ]
    )


def _border_top(title: str, width: int, no_color: bool) -> str:
    if width < 2:
        return "─" * width
    inner = width - 2
    title = fit_ansi_line(title, min(inner, display_width(title)))
    fill = "─" * max(0, inner - display_width(title))
    return f"┌{_styled(title, PANE_TITLE_SGR, no_color)}{fill}┐"


def _border_bottom(width: int) -> str:
    if width < 2:
        return "─" * width
    return f"└{'─' * (width - 2)}┘"


def _boxed_row(content: str, width: int) -> str:
    if width < 2:
        return " " * width
    return f"│{fit_ansi_line(content, width - 2)}│"


def _pane(title: str, rows: list[str], width: int, height: int, no_color: bool) -> list[str]:
    """Return ``height`` rows drawing a bordered pane of ``width`` columns."""
    if height <= 0:
        return []
    if height == 1:
        return [_border_top(title, width, no_color)]
    inner_rows = height - BORDER_ROWS
    out = [_border_top(title, width, no_color)]
    for row in range(inner_rows):
        out.append(_boxed_row(rows[row] if row < len(rows) else "", width))
    out.append(_border_bottom(width))
    return out


def entry_rows(context: FrameContext, visible_height: int) -> list[str]:
    """Return list-pane rows for the visible slice of entries."""
    rows: list[str] = []
    inner_width = max(0, pane_widths(context.width)[0] - 2)
    for idx in visible_range(context.scroll_offset, len(context.entries), visible_height):
        name = sanitize_preview_row(context.entries[idx].name)
        if idx == context.selected_index:
            if context.no_color:
                name = f"> {name}"
            else:
                name = f"{SELECTED_SGR}{fit_ansi_line(name, inner_width)}{RESET}"
        rows.append(name)
    return rows


def build_frame(context: FrameContext) -> str:
    """Compose the full-screen frame for ``context`` as one string."""
    width = max(1, context.width)
    height = max(1, context.height)
    visible_height = list_visible_height(height)
    body_height = max(0, height - CHROME_ROWS)
    left_width, right_width = pane_widths(width)

    list_pane = _pane(
        f" Directory: {context.current_dir}",
        entry_rows(context, visible_height),
        left_width,
        body_height,
        context.no_color,
    )
    preview_pane = _pane(" Preview ", context.preview_rows, right_width, body_height, context.no_color)

    rows = [_centered(_styled(APP_TITLE, TITLE_SGR, context.no_color), width)]
    for left, right in zip(list_pane, preview_pane):
        rows.append(left + right)
    if context.status_message:
        rows.append(_styled(fit_ansi_line(context.status_message, width), STATUS_SGR, context.no_color))
    else:
        rows.append(_centered(_instructions_line(context.no_color), width))
    return "\033[H\033[J" + "\r\n".join(rows[:height])


def render_frame(context: FrameContext, fd: int | None = None) -> None:
    """Write the composed frame to ``fd`` (stdout by default)."""
    target_fd = sys.stdout.fileno() if fd is None else fd
    os.write(target_fd, build_frame(context).encode("utf-8", errors="replace"))


__all__ = [
    "APP_TITLE",
    "FrameContext",
    "build_frame",
    "entry_rows",
    "list_visible_height",
    "pane_widths",
    "render_frame",
]
