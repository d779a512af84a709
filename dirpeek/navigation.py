"""Navigation state for the directory browser.

Holds the current directory, its entry list, the selection index and the
last computed scroll offset. Directory switches are all-or-nothing: when the
target cannot be listed the previous state stays in place.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .entries import Entry, list_entries
from .viewport import compute_scroll_offset

logger = logging.getLogger(__name__)


class ActivationKind(enum.Enum):
    NONE = "none"
    CHANGED_DIRECTORY = "changed_directory"
    OPEN_FILE = "open_file"


@dataclass(frozen=True)
class Activation:
    kind: ActivationKind
    path: Path | None = None

    @property
    def changed(self) -> bool:
        return self.kind is ActivationKind.CHANGED_DIRECTORY


NO_ACTIVATION = Activation(ActivationKind.NONE)


def default_start_directory() -> Path:
    """Return the home directory, or the working directory if home is unknown."""
    try:
        return Path.home()
    except (KeyError, RuntimeError):
        return Path.cwd()


class NavigationState:
    """Selection and directory state driven by navigation commands."""

    def __init__(
        self,
        current_dir: Path,
        entries: list[Entry],
        lister: Callable[[Path], list[Entry]] = list_entries,
    ) -> None:
        if not entries:
            raise ValueError("entries must contain at least the parent entry")
        self.current_dir = current_dir
        self.entries = entries
        self.selected_index = 0
        self.scroll_offset = 0
        self._lister = lister

    @classmethod
    def open(
        cls,
        directory: Path,
        lister: Callable[[Path], list[Entry]] = list_entries,
    ) -> NavigationState:
        """Build state rooted at ``directory``; raises ``OSError`` if unreadable."""
        directory = directory.resolve()
        return cls(directory, lister(directory), lister=lister)

    @property
    def selected_entry(self) -> Entry:
        return self.entries[self.selected_index]

    @property
    def selected_path(self) -> Path:
        return self.selected_entry.path(self.current_dir)

    def move_selection(self, delta: int) -> bool:
        """Move selection by ``delta`` rows, clamped to the list bounds."""
        target = max(0, min(len(self.entries) - 1, self.selected_index + delta))
        if target == self.selected_index:
            return False
        self.selected_index = target
        return True

    def change_directory(self, directory: Path) -> bool:
        """Switch to ``directory`` if it can be listed; keep state otherwise."""
        try:
            entries = self._lister(directory)
        except OSError as exc:
            logger.debug("Rejected directory change to %s: %s", directory, exc)
            return False
        self.current_dir = directory
        self.entries = entries
        self.selected_index = 0
        self.scroll_offset = 0
        return True

    def reload(self) -> bool:
        """Re-list the current directory, keeping the selected entry if it still exists."""
        selected = self.selected_entry
        if not self.change_directory(self.current_dir):
            return False
        if selected in self.entries:
            self.selected_index = self.entries.index(selected)
        return True

    def activate(self) -> Activation:
        """Act on the selected entry.

        The parent sentinel and directories switch directory; files are
        returned as an open request without touching navigation state.
        """
        entry = self.selected_entry
        if entry.is_parent:
            parent = self.current_dir.parent
            if parent == self.current_dir:
                return NO_ACTIVATION
            target = parent
        elif entry.is_dir:
            target = entry.path(self.current_dir)
        else:
            return Activation(ActivationKind.OPEN_FILE, entry.path(self.current_dir))

        if not self.change_directory(target):
            return NO_ACTIVATION
        return Activation(ActivationKind.CHANGED_DIRECTORY, target)

    def update_scroll(self, visible_height: int) -> int:
        """Recompute and cache the scroll offset for ``visible_height`` rows."""
        self.scroll_offset = compute_scroll_offset(
            self.selected_index,
            len(self.entries),
            visible_height,
            self.scroll_offset,
        )
        return self.scroll_offset


__all__ = [
    "Activation",
    "ActivationKind",
    "NO_ACTIVATION",
    "NavigationState",
    "default_start_directory",
]
