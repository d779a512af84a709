"""Directory-entry model and one-level directory listing.

Entries are the rows of the browser list: the synthetic parent sentinel
followed by the visible children of the current directory.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from pathlib import Path

PARENT_ENTRY_NAME = ".."
DIRECTORY_MARKER = "/"


class EntryKind(enum.Enum):
    PARENT = "parent"
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class Entry:
    """One list row; directory names carry a trailing ``/``."""

    name: str
    kind: EntryKind

    @property
    def is_parent(self) -> bool:
        return self.kind is EntryKind.PARENT

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    def path(self, current_dir: Path) -> Path:
        """Return the absolute path this entry points at inside ``current_dir``."""
        if self.is_parent:
            return current_dir.parent
        return current_dir / self.name.rstrip(DIRECTORY_MARKER)


PARENT_ENTRY = Entry(PARENT_ENTRY_NAME, EntryKind.PARENT)


def is_hidden_name(name: str) -> bool:
    return name.startswith(".")


def list_entries(directory: Path) -> list[Entry]:
    """List visible children of ``directory`` behind the parent sentinel.

    Children are sorted by display name in codepoint order. Symlinks are
    followed when classifying, so a link to a directory is navigable.
    Raises ``OSError`` when the directory cannot be read; no partial list is
    ever returned.
    """
    children: list[Entry] = []
    with os.scandir(directory) as scanned:
        for child in scanned:
            name = child.name
            if is_hidden_name(name):
                continue
            try:
                is_dir = child.is_dir()
            except OSError:
                is_dir = False
            if is_dir:
                children.append(Entry(f"{name}{DIRECTORY_MARKER}", EntryKind.DIRECTORY))
            else:
                children.append(Entry(name, EntryKind.FILE))

    children.sort(key=lambda entry: entry.name)
    return [PARENT_ENTRY, *children]


__all__ = [
    "DIRECTORY_MARKER",
    "Entry",
    "EntryKind",
    "PARENT_ENTRY",
    "PARENT_ENTRY_NAME",
    "is_hidden_name",
    "list_entries",
]
