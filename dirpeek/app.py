"""Interactive browser session and main loop.

``BrowserSession`` is the top-level state machine: it applies commands to
``NavigationState`` while browsing, suspends around the external editor and
stops for good once quit. ``run_browser`` wires it to the real terminal.
"""

from __future__ import annotations

import enum
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from .editor import launch_editor
from .input import Command, command_for_key, read_key
from .navigation import ActivationKind, NavigationState
from .preview import PreviewResult, generate_preview, preview_lines
from .render import FrameContext, list_visible_height, render_frame
from .terminal import TerminalController

logger = logging.getLogger(__name__)


class AppPhase(enum.Enum):
    BROWSING = "browsing"
    SUSPENDED = "suspended"
    TERMINATED = "terminated"


class BrowserSession:
    """Browsing state machine around navigation, preview and editor handoff.

    ``open_file`` runs the external editor on a path and returns an error
    message or ``None``; it is only called while the session is suspended.
    """

    def __init__(
        self,
        navigation: NavigationState,
        open_file: Callable[[Path], str | None],
        style: str,
        no_color: bool = False,
    ) -> None:
        self.navigation = navigation
        self.phase = AppPhase.BROWSING
        self.status_message = ""
        self.style = style
        self.no_color = no_color
        self._open_file = open_file
        self.preview: PreviewResult = generate_preview(navigation.selected_entry, navigation.current_dir)
        self.preview_rows = self._format_preview()

    def _format_preview(self) -> list[str]:
        return preview_lines(self.preview, style=self.style, colorize=not self.no_color)

    def refresh_preview(self) -> None:
        """Regenerate the preview for the current selection."""
        self.preview = generate_preview(self.navigation.selected_entry, self.navigation.current_dir)
        self.preview_rows = self._format_preview()

    def handle_command(self, command: Command) -> bool:
        """Apply ``command``; returns whether it was processed.

        Commands are only honoured while browsing.
        """
        if self.phase is not AppPhase.BROWSING:
            return False
        self.status_message = ""

        if command is Command.QUIT:
            self.phase = AppPhase.TERMINATED
            return True
        if command is Command.MOVE_UP or command is Command.MOVE_DOWN:
            delta = -1 if command is Command.MOVE_UP else 1
            if self.navigation.move_selection(delta):
                self.refresh_preview()
            return True

        activation = self.navigation.activate()
        if activation.kind is ActivationKind.CHANGED_DIRECTORY:
            self.refresh_preview()
        elif activation.kind is ActivationKind.OPEN_FILE and activation.path is not None:
            self._edit(activation.path)
        return True

    def _edit(self, path: Path) -> None:
        self.phase = AppPhase.SUSPENDED
        try:
            error = self._open_file(path)
        finally:
            self.phase = AppPhase.BROWSING
        if error:
            self.status_message = error
        # The edit may have changed the file or the directory itself.
        self.navigation.reload()
        self.refresh_preview()

    def frame_context(self, width: int, height: int) -> FrameContext:
        """Update the scroll offset for the window size and snapshot the frame."""
        self.navigation.update_scroll(list_visible_height(height))
        return FrameContext(
            current_dir=self.navigation.current_dir,
            entries=self.navigation.entries,
            selected_index=self.navigation.selected_index,
            scroll_offset=self.navigation.scroll_offset,
            width=width,
            height=height,
            preview_rows=self.preview_rows,
            status_message=self.status_message,
            no_color=self.no_color,
        )


def run_browser(
    start_dir: Path,
    style: str,
    no_color: bool = False,
    editor_command: str | None = None,
) -> None:
    """Run the interactive browser rooted at ``start_dir`` until quit.

    Raises ``OSError`` when ``start_dir`` cannot be listed.
    """
    navigation = NavigationState.open(start_dir)
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)

    def open_file(path: Path) -> str | None:
        return launch_editor(
            path,
            terminal.disable_tui_mode,
            terminal.enable_tui_mode,
            command=editor_command,
        )

    session = BrowserSession(navigation, open_file, style=style, no_color=no_color)
    logger.debug("Browsing %s", navigation.current_dir)
    with terminal.raw_mode():
        while session.phase is not AppPhase.TERMINATED:
            size = terminal.size()
            render_frame(session.frame_context(size.columns, size.lines), stdout_fd)
            key = read_key(stdin_fd)
            if not key:
                # End of input.
                break
            command = command_for_key(key)
            if command is not None:
                session.handle_command(command)


__all__ = [
    "AppPhase",
    "BrowserSession",
    "run_browser",
]
