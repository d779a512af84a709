"""Command-line front door for dirpeek.

Parses CLI options, resolves the starting directory and optional logging,
then dispatches into the interactive browser.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .app import run_browser
from .config import load_editor_command, load_no_color, load_style
from .entries import Entry, EntryKind
from .navigation import default_start_directory
from .preview import generate_preview, preview_lines

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def render_preview_text(path: Path, style: str, colorize: bool) -> str:
    """Render preview-pane rows for ``path`` as plain text output."""
    target = path.resolve()
    kind = EntryKind.DIRECTORY if target.is_dir() else EntryKind.FILE
    result = generate_preview(Entry(target.name, kind), target.parent)
    return "".join(f"{row}\n" for row in preview_lines(result, style=style, colorize=colorize))


def _configure_logging(log_file: str | None) -> None:
    if log_file is None:
        return
    logging.basicConfig(filename=log_file, level=logging.DEBUG, format=LOG_FORMAT)


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch dirpeek.

    ``default_path`` is primarily for tests; when omitted the home directory
    is used, or the working directory when home cannot be resolved. A file
    path starts the browser in the file's directory.
    """
    parser = argparse.ArgumentParser(
        description="Browse directories in the terminal with an inline preview of the selected entry."
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to start in. Defaults to home.")
    parser.add_argument("--style", default=None, help="Pygments style name for text previews.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--preview", metavar="PATH", help="Print the preview for PATH and exit.")
    parser.add_argument("--log-file", metavar="PATH", help="Write debug logs to PATH.")
    args = parser.parse_args()

    _configure_logging(args.log_file)
    style = args.style or load_style()
    no_color = args.no_color or load_no_color()

    if args.preview is not None:
        preview_path = Path(args.preview)
        if not preview_path.exists():
            raise SystemExit(f"Path not found: {preview_path}")
        colorize = not no_color and sys.stdout.isatty()
        sys.stdout.write(render_preview_text(preview_path, style, colorize))
        return

    if default_path is None:
        default_path = default_start_directory()
    path = Path(args.path) if args.path else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        path = path.parent

    try:
        run_browser(path, style, no_color=no_color, editor_command=load_editor_command())
    except OSError as exc:
        raise SystemExit(f"Cannot open directory: {path}: {exc}") from exc


if __name__ == "__main__":
    main()
