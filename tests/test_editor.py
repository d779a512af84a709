"""Tests for the external editor handoff.

The terminal must be handed back and reclaimed on every path, and failures
come back as messages rather than exceptions.
"""

from __future__ import annotations

import subprocess
import unittest
from pathlib import Path
from unittest import mock

from dirpeek.editor import DEFAULT_EDITOR, launch_editor, resolve_editor_command


class ResolveEditorCommandTests(unittest.TestCase):
    def test_configured_command_wins_over_environment(self) -> None:
        with mock.patch.dict("dirpeek.editor.os.environ", {"EDITOR": "nano"}, clear=True):
            self.assertEqual(resolve_editor_command("code --wait"), ["code", "--wait"])

    def test_environment_editor_is_split(self) -> None:
        with mock.patch.dict("dirpeek.editor.os.environ", {"EDITOR": "emacs -nw"}, clear=True):
            self.assertEqual(resolve_editor_command(None), ["emacs", "-nw"])

    def test_blank_values_fall_back_to_default(self) -> None:
        with mock.patch.dict("dirpeek.editor.os.environ", {"EDITOR": "   "}, clear=True):
            self.assertEqual(resolve_editor_command(""), [DEFAULT_EDITOR])


class LaunchEditorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.calls: list[str] = []

    def _disable(self) -> None:
        self.calls.append("disable")

    def _enable(self) -> None:
        self.calls.append("enable")

    def test_successful_edit_returns_none_and_brackets_tui_mode(self) -> None:
        target = Path("/tmp/notes.txt")
        with mock.patch(
            "dirpeek.editor.subprocess.run",
            side_effect=lambda *args, **kwargs: self.calls.append("run") or subprocess.CompletedProcess(args[0], 0),
        ) as run_mock:
            error = launch_editor(target, self._disable, self._enable, command="vim")

        self.assertIsNone(error)
        self.assertEqual(self.calls, ["disable", "run", "enable"])
        self.assertEqual(run_mock.call_args.args[0], ["vim", str(target)])

    def test_launch_failure_restores_tui_mode_and_reports(self) -> None:
        with mock.patch("dirpeek.editor.subprocess.run", side_effect=FileNotFoundError(2, "No such file")):
            with self.assertLogs("dirpeek.editor", level="WARNING"):
                error = launch_editor(Path("/tmp/a"), self._disable, self._enable, command="missing-editor")

        self.assertIsNotNone(error)
        self.assertIn("Failed to launch editor", error)
        self.assertEqual(self.calls, ["disable", "enable"])

    def test_nonzero_exit_is_reported_not_raised(self) -> None:
        with mock.patch(
            "dirpeek.editor.subprocess.run",
            return_value=subprocess.CompletedProcess(["vim"], 3),
        ):
            with self.assertLogs("dirpeek.editor", level="WARNING"):
                error = launch_editor(Path("/tmp/a"), self._disable, self._enable, command="vim")

        self.assertEqual(error, "Editor exited with status 3")
        self.assertEqual(self.calls, ["disable", "enable"])

    def test_unparsable_command_does_not_touch_terminal(self) -> None:
        with mock.patch("dirpeek.editor.subprocess.run") as run_mock:
            with self.assertLogs("dirpeek.editor", level="WARNING"):
                error = launch_editor(Path("/tmp/a"), self._disable, self._enable, command='vim "unterminated')

        self.assertIn("invalid editor command", error)
        run_mock.assert_not_called()
        self.assertEqual(self.calls, [])


if __name__ == "__main__":
    unittest.main()
