"""Viewport scrolling for the entry list.

The offset is derived from a handful of scalars each render. The previous
offset is the reference frame, so the list only scrolls once the selection
comes within ``SCROLL_MARGIN`` rows of an edge.
"""

from __future__ import annotations

SCROLL_MARGIN = 3


def max_scroll_offset(entry_count: int, visible_height: int) -> int:
    return max(0, entry_count - visible_height)


def compute_scroll_offset(
    selected_index: int,
    entry_count: int,
    visible_height: int,
    prior_offset: int = 0,
) -> int:
    """Return the list scroll offset keeping ``selected_index`` visible.

    Moving toward the bottom edge scrolls so ``SCROLL_MARGIN`` rows stay
    visible below the selection; moving toward the top edge keeps the same
    margin above it. Anywhere in between the prior offset is reused.
    A non-positive ``visible_height`` leaves the offset unchanged.
    """
    if visible_height <= 0:
        return prior_offset

    margin = min(SCROLL_MARGIN, visible_height)
    visible_pos = max(0, selected_index - prior_offset)
    max_scroll = max_scroll_offset(entry_count, visible_height)

    offset = prior_offset
    if visible_pos >= visible_height - margin:
        if prior_offset < max_scroll:
            offset = min(max_scroll, max(0, selected_index + margin - (visible_height - 1)))
    elif visible_pos < margin:
        offset = selected_index - margin if selected_index >= margin else 0

    # Tiny viewports (margin == height) would otherwise scroll past the selection.
    offset = max(offset, selected_index - visible_height + 1)
    offset = min(offset, selected_index)
    return max(0, min(offset, max_scroll))


def visible_range(scroll_offset: int, entry_count: int, visible_height: int) -> range:
    """Return the entry indexes drawn for ``scroll_offset``."""
    start = max(0, scroll_offset)
    end = min(entry_count, start + max(0, visible_height))
    return range(start, max(start, end))


__all__ = [
    "SCROLL_MARGIN",
    "compute_scroll_offset",
    "max_scroll_offset",
    "visible_range",
]
