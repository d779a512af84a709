"""Editor launch helper for opening the selected file externally.

Runs the configured editor (or ``$EDITOR``) while temporarily leaving
raw/alternate-screen TUI mode. Returns an error message string instead of
raising so the browser can show it and carry on.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Callable

DEFAULT_EDITOR = "vi"

logger = logging.getLogger(__name__)


def resolve_editor_command(configured: str | None = None) -> list[str]:
    """Return the editor argv prefix from config, ``$EDITOR`` or the default."""
    for candidate in (configured, os.environ.get("EDITOR")):
        if candidate and candidate.strip():
            cmd = shlex.split(candidate)
            if cmd:
                return cmd
    return [DEFAULT_EDITOR]


def launch_editor(
    target: Path,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
    command: str | None = None,
) -> str | None:
    """Run the editor on ``target`` and return an error message on failure.

    TUI mode is re-enabled on every exit path, including launch errors.
    """
    try:
        cmd = resolve_editor_command(command)
    except ValueError as exc:
        logger.warning("Invalid editor command %r: %s", command, exc)
        return f"Cannot edit: invalid editor command ({exc})"

    disable_tui_mode()
    try:
        completed = subprocess.run([*cmd, str(target)], check=False)
    except OSError as exc:
        logger.warning("Failed to launch editor %s: %s", cmd[0], exc)
        return f"Failed to launch editor: {exc}"
    finally:
        enable_tui_mode()

    if completed.returncode != 0:
        logger.warning("Editor %s exited with status %d for %s", cmd[0], completed.returncode, target)
        return f"Editor exited with status {completed.returncode}"
    return None
