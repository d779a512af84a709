"""Tests for selection movement and directory activation.

Covers boundary clamping, parent/directory/file activation, and the rule
that a failed listing leaves navigation state untouched.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dirpeek.entries import PARENT_ENTRY, Entry, EntryKind, list_entries
from dirpeek.navigation import ActivationKind, NavigationState, default_start_directory


def _make_tree(root: Path) -> None:
    (root / "docs").mkdir()
    (root / "docs" / "guide.md").write_text("# guide\n", encoding="utf-8")
    (root / "readme.txt").write_text("hello\n", encoding="utf-8")


class MoveSelectionTests(unittest.TestCase):
    def setUp(self) -> None:
        entries = [PARENT_ENTRY, Entry("a", EntryKind.FILE), Entry("b", EntryKind.FILE)]
        self.state = NavigationState(Path("/tmp"), entries)

    def test_move_down_and_up_within_bounds(self) -> None:
        self.assertTrue(self.state.move_selection(1))
        self.assertTrue(self.state.move_selection(1))
        self.assertEqual(self.state.selected_index, 2)
        self.assertTrue(self.state.move_selection(-1))
        self.assertEqual(self.state.selected_index, 1)

    def test_moves_past_boundaries_are_no_ops(self) -> None:
        self.assertFalse(self.state.move_selection(-1))
        self.assertEqual(self.state.selected_index, 0)
        self.state.move_selection(1)
        self.state.move_selection(1)
        self.assertFalse(self.state.move_selection(1))
        self.assertEqual(self.state.selected_index, 2)

    def test_move_does_not_touch_scroll_offset(self) -> None:
        self.state.scroll_offset = 1
        self.state.move_selection(1)
        self.assertEqual(self.state.scroll_offset, 1)

    def test_empty_entries_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            NavigationState(Path("/tmp"), [])


class ActivateTests(unittest.TestCase):
    def test_activate_directory_lists_it_and_resets_selection(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            state = NavigationState.open(root)
            state.selected_index = state.entries.index(Entry("docs/", EntryKind.DIRECTORY))
            state.scroll_offset = 1

            activation = state.activate()

            self.assertEqual(activation.kind, ActivationKind.CHANGED_DIRECTORY)
            self.assertEqual(state.current_dir, root / "docs")
            self.assertEqual(state.entries, [PARENT_ENTRY, Entry("guide.md", EntryKind.FILE)])
            self.assertEqual(state.selected_index, 0)
            self.assertEqual(state.scroll_offset, 0)

    def test_activate_parent_goes_up(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            state = NavigationState.open(root / "docs")

            activation = state.activate()

            self.assertTrue(activation.changed)
            self.assertEqual(state.current_dir, root)
            self.assertIn(Entry("docs/", EntryKind.DIRECTORY), state.entries)

    def test_activate_parent_at_filesystem_root_is_no_op(self) -> None:
        root = Path("/")
        lister = mock.Mock(return_value=[PARENT_ENTRY])
        state = NavigationState(root, [PARENT_ENTRY, Entry("etc/", EntryKind.DIRECTORY)], lister=lister)

        activation = state.activate()

        self.assertEqual(activation.kind, ActivationKind.NONE)
        self.assertEqual(state.current_dir, root)
        lister.assert_not_called()

    def test_activate_file_requests_open_without_changing_state(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            state = NavigationState.open(root)
            index = state.entries.index(Entry("readme.txt", EntryKind.FILE))
            state.selected_index = index
            entries_before = list(state.entries)

            activation = state.activate()

            self.assertEqual(activation.kind, ActivationKind.OPEN_FILE)
            self.assertEqual(activation.path, root / "readme.txt")
            self.assertEqual(state.current_dir, root)
            self.assertEqual(state.entries, entries_before)
            self.assertEqual(state.selected_index, index)

    def test_failed_listing_keeps_previous_state(self) -> None:
        entries = [PARENT_ENTRY, Entry("locked/", EntryKind.DIRECTORY)]
        lister = mock.Mock(side_effect=PermissionError(13, "Permission denied"))
        state = NavigationState(Path("/srv/data"), entries, lister=lister)
        state.selected_index = 1
        state.scroll_offset = 1

        activation = state.activate()

        self.assertEqual(activation.kind, ActivationKind.NONE)
        lister.assert_called_once_with(Path("/srv/data/locked"))
        self.assertEqual(state.current_dir, Path("/srv/data"))
        self.assertIs(state.entries, entries)
        self.assertEqual(state.selected_index, 1)
        self.assertEqual(state.scroll_offset, 1)

    def test_reload_picks_up_new_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            state = NavigationState.open(root)
            (root / "new.txt").write_text("", encoding="utf-8")

            self.assertTrue(state.reload())

            self.assertEqual(state.entries, list_entries(root))

    def test_reload_keeps_selected_entry_when_it_moves(self) -> None:
        notes = Entry("notes.txt", EntryKind.FILE)
        before = [PARENT_ENTRY, notes]
        after = [PARENT_ENTRY, Entry("added.txt", EntryKind.FILE), notes]
        lister = mock.Mock(return_value=after)
        state = NavigationState(Path("/srv"), before, lister=lister)
        state.move_selection(1)

        self.assertTrue(state.reload())

        self.assertEqual(state.selected_index, 2)
        self.assertEqual(state.selected_entry, notes)

    def test_reload_falls_back_to_first_entry_when_selection_is_gone(self) -> None:
        before = [PARENT_ENTRY, Entry("gone.txt", EntryKind.FILE)]
        lister = mock.Mock(return_value=[PARENT_ENTRY])
        state = NavigationState(Path("/srv"), before, lister=lister)
        state.move_selection(1)

        self.assertTrue(state.reload())

        self.assertEqual(state.selected_index, 0)
        self.assertEqual(state.scroll_offset, 0)


class UpdateScrollTests(unittest.TestCase):
    def test_update_scroll_uses_cached_offset_as_reference(self) -> None:
        entries = [PARENT_ENTRY] + [Entry(f"f{i:03d}", EntryKind.FILE) for i in range(99)]
        state = NavigationState(Path("/tmp"), entries)
        for _ in range(7):
            state.move_selection(1)
            state.update_scroll(10)
        self.assertEqual(state.scroll_offset, 1)
        state.move_selection(-1)
        self.assertEqual(state.update_scroll(10), 1)


class DefaultStartDirectoryTests(unittest.TestCase):
    def test_falls_back_to_cwd_when_home_is_unresolvable(self) -> None:
        with mock.patch("dirpeek.navigation.Path.home", side_effect=RuntimeError("no home")), mock.patch(
            "dirpeek.navigation.Path.cwd", return_value=Path("/work")
        ):
            self.assertEqual(default_start_directory(), Path("/work"))


if __name__ == "__main__":
    unittest.main()
