"""Preview generation for the selected entry.

``generate_preview`` classifies the selected path and returns one of the
``PreviewResult`` variants; ``preview_lines`` turns a result into display
rows for the preview pane. Generation only reads the filesystem.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path

from .entries import DIRECTORY_MARKER, Entry, is_hidden_name
from .highlight import DEFAULT_STYLE, colorize_lines, sanitize_preview_row

MAX_PREVIEW_BYTES = 1_048_576
MAX_PREVIEW_LINES = 50
MAX_DIRECTORY_ITEMS = 30
BINARY_SNIFF_BYTES = 1_024
TEXT_ENCODING = "utf-8"
IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "bmp", "webp", "svg", "ico"})
_TEXT_CONTROL_BYTES = frozenset({9, 10, 13})

PARENT_HINT_MESSAGE = "Parent directory. Press Enter to go up."


@dataclass(frozen=True)
class ParentHint:
    message: str = PARENT_HINT_MESSAGE


@dataclass(frozen=True)
class DirectorySummary:
    subdir_count: int
    file_count: int
    total_bytes: int
    listed_items: tuple[str, ...]
    truncated_count: int


@dataclass(frozen=True)
class TextPreview:
    file_name: str
    byte_size: int
    total_line_count: int
    shown_lines: tuple[str, ...]
    truncated: bool


@dataclass(frozen=True)
class BinaryNotice:
    byte_size: int


@dataclass(frozen=True)
class TooLarge:
    byte_size: int


@dataclass(frozen=True)
class ImagePlaceholder:
    extension: str


@dataclass(frozen=True)
class InvalidEncoding:
    byte_size: int


@dataclass(frozen=True)
class AccessError:
    message: str


PreviewResult = (
    ParentHint
    | DirectorySummary
    | TextPreview
    | BinaryNotice
    | TooLarge
    | ImagePlaceholder
    | InvalidEncoding
    | AccessError
)


def image_extension(path: Path) -> str | None:
    """Return the lower-cased extension when ``path`` names an image file."""
    extension = path.suffix[1:].lower()
    if extension in IMAGE_EXTENSIONS:
        return extension
    return None


def looks_binary(data: bytes) -> bool:
    """Return whether the first sniffed bytes contain non-text control bytes."""
    return any(byte < 0x20 and byte not in _TEXT_CONTROL_BYTES for byte in data[:BINARY_SNIFF_BYTES])


def split_lines(text: str) -> list[str]:
    """Split on ``\\n``, dropping a trailing ``\\r`` per line and the final newline."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _error_message(path: Path, exc: OSError) -> str:
    reason = exc.strerror or str(exc)
    return f"Cannot read {path}: {reason}"


def summarize_directory(directory: Path) -> DirectorySummary:
    """Summarize visible children of ``directory``; raises ``OSError`` if unreadable."""
    dir_names: list[str] = []
    file_names: list[str] = []
    total_bytes = 0
    with os.scandir(directory) as scanned:
        for child in scanned:
            if is_hidden_name(child.name):
                continue
            try:
                is_dir = child.is_dir()
            except OSError:
                is_dir = False
            if is_dir:
                dir_names.append(child.name)
                continue
            file_names.append(child.name)
            try:
                total_bytes += child.stat().st_size
            except OSError:
                pass

    dir_names.sort()
    file_names.sort()
    ordered = [f"{name}{DIRECTORY_MARKER}" for name in dir_names] + file_names
    listed = ordered[:MAX_DIRECTORY_ITEMS]
    return DirectorySummary(
        subdir_count=len(dir_names),
        file_count=len(file_names),
        total_bytes=total_bytes,
        listed_items=tuple(listed),
        truncated_count=len(ordered) - len(listed),
    )


def preview_file(path: Path, byte_size: int) -> PreviewResult:
    """Classify and excerpt a regular file of ``byte_size`` bytes."""
    extension = image_extension(path)
    if extension is not None:
        return ImagePlaceholder(extension)
    if byte_size > MAX_PREVIEW_BYTES:
        return TooLarge(byte_size)

    try:
        with path.open("rb") as handle:
            data = handle.read(MAX_PREVIEW_BYTES + 1)
    except OSError as exc:
        return AccessError(_error_message(path, exc))
    if len(data) > MAX_PREVIEW_BYTES:
        # Grew after stat.
        return TooLarge(max(byte_size, len(data)))
    if looks_binary(data):
        return BinaryNotice(len(data))
    try:
        text = data.decode(TEXT_ENCODING)
    except UnicodeDecodeError:
        return InvalidEncoding(len(data))

    lines = split_lines(text)
    return TextPreview(
        file_name=path.name,
        byte_size=len(data),
        total_line_count=len(lines),
        shown_lines=tuple(lines[:MAX_PREVIEW_LINES]),
        truncated=len(lines) > MAX_PREVIEW_LINES,
    )


def generate_preview(entry: Entry, current_dir: Path) -> PreviewResult:
    """Build the preview for ``entry`` as listed inside ``current_dir``."""
    if entry.is_parent:
        return ParentHint()

    path = entry.path(current_dir)
    try:
        info = path.stat()
    except OSError as exc:
        return AccessError(_error_message(path, exc))

    if stat.S_ISDIR(info.st_mode):
        try:
            return summarize_directory(path)
        except OSError as exc:
            return AccessError(_error_message(path, exc))
    if not stat.S_ISREG(info.st_mode):
        return AccessError(f"Cannot preview {path}: not a regular file")
    return preview_file(path, info.st_size)


def format_size(byte_size: int) -> str:
    """Format ``byte_size`` with a binary unit suffix."""
    size = float(byte_size)
    for unit in ("B", "KiB", "MiB", "GiB"):
        if size < 1024 or unit == "GiB":
            if unit == "B":
                return f"{byte_size} B"
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{byte_size} B"


def preview_lines(
    result: PreviewResult,
    style: str = DEFAULT_STYLE,
    colorize: bool = False,
) -> list[str]:
    """Render ``result`` as preview-pane rows.

    Text excerpts are sanitized so control bytes cannot reach the terminal,
    and coloured with Pygments when ``colorize`` is set.
    """
    if isinstance(result, ParentHint):
        return [result.message]
    if isinstance(result, DirectorySummary):
        rows = [
            f"{result.subdir_count} directories, {result.file_count} files, "
            f"{format_size(result.total_bytes)}",
            "",
            *result.listed_items,
        ]
        if result.truncated_count:
            rows.append(f"... and {result.truncated_count} more")
        return rows
    if isinstance(result, TextPreview):
        header = f"{result.file_name} ({format_size(result.byte_size)}, {result.total_line_count} lines)"
        shown = [sanitize_preview_row(line) for line in result.shown_lines]
        if colorize:
            shown = colorize_lines(shown, Path(result.file_name), style)
        rows = [header, "", *shown]
        if result.truncated:
            rows.append("")
            rows.append(f"... {result.total_line_count - len(result.shown_lines)} more lines")
        return rows
    if isinstance(result, BinaryNotice):
        return [f"<binary file: {format_size(result.byte_size)}>"]
    if isinstance(result, TooLarge):
        return [f"<file too large to preview: {format_size(result.byte_size)}>"]
    if isinstance(result, ImagePlaceholder):
        return [f"<{result.extension} image: no preview>"]
    if isinstance(result, InvalidEncoding):
        return [f"<not valid {TEXT_ENCODING} text: {format_size(result.byte_size)}>"]
    return [f"<error: {result.message}>"]


__all__ = [
    "AccessError",
    "BinaryNotice",
    "DirectorySummary",
    "IMAGE_EXTENSIONS",
    "ImagePlaceholder",
    "InvalidEncoding",
    "MAX_DIRECTORY_ITEMS",
    "MAX_PREVIEW_BYTES",
    "MAX_PREVIEW_LINES",
    "ParentHint",
    "PreviewResult",
    "TextPreview",
    "TooLarge",
    "format_size",
    "generate_preview",
    "looks_binary",
    "preview_lines",
    "split_lines",
    "summarize_directory",
]
