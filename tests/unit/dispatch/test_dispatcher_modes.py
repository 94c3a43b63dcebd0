"""Mode dispatcher tests: key routing, mode transitions and advisories.

Each test drives the dispatcher with key tokens exactly as the runtime loop
would and inspects the returned render model.
"""

from __future__ import annotations

import os
import stat
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fsnav.bookmarks import BookmarkStore
from fsnav.directory_pane import DirectoryCursor
from fsnav.dispatch import ExitKind, Mode, ModeDispatcher
from fsnav.editors import GroupInfo, UserInfo
from fsnav.entry_model import FilesystemOps
from fsnav.errors import ErrorKind


def _build_tree(root: Path) -> None:
    (root / "alpha").mkdir()
    (root / "beta").mkdir()
    (root / "alpha" / "inner.txt").write_text("inner", encoding="utf-8")
    for idx in range(5):
        (root / f"file{idx}.txt").write_text(f"line {idx}\n", encoding="utf-8")


class DispatcherTestCase(unittest.TestCase):
    elevated = False

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        _build_tree(self.root)
        self.save_preferences = mock.Mock()
        self.chown_calls: list[tuple[Path, int, int]] = []
        fs = FilesystemOps(lchown=lambda path, uid, gid: self.chown_calls.append((path, uid, gid)))
        cursor, _ = DirectoryCursor.open(self.root, fs=fs)
        self.cursor = cursor
        self.dispatcher = ModeDispatcher(
            cursor,
            BookmarkStore(),
            elevated=self.elevated,
            save_preferences=self.save_preferences,
            color=False,
            users_loader=lambda: [UserInfo(0, "root"), UserInfo(1000, "alice")],
            groups_loader=lambda: [GroupInfo(0, "root"), GroupInfo(100, "users")],
        )

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def press(self, *keys: str):
        model = None
        for key in keys:
            model = self.dispatcher.handle_input(key)
        return model

    def type_text(self, text: str):
        return self.press(*["SPACE" if ch == " " else ch for ch in text])

    def selected_name(self) -> str:
        return self.cursor.selected_entry.name


class BaseModeTests(DispatcherTestCase):
    def test_movement_keys_change_selection(self) -> None:
        model = self.press("j", "j")
        self.assertIs(model.mode, Mode.NORMAL)
        self.assertEqual(model.panes[0].selected_index, 2)
        self.press("G")
        self.assertEqual(self.selected_name(), "file4.txt")
        self.press("g")
        self.assertEqual(self.selected_name(), "alpha")

    def test_enter_and_back_navigate(self) -> None:
        model = self.press("ENTER")
        self.assertEqual(model.panes[0].path, str(self.root / "alpha"))
        self.press("BACKSPACE")
        self.assertEqual(self.cursor.path, self.root)
        self.assertEqual(self.selected_name(), "alpha")

    def test_space_enters_multi_select_and_marks(self) -> None:
        model = self.press("SPACE")
        self.assertIs(model.mode, Mode.MULTI_SELECT)
        self.assertEqual(model.panes[0].marked_count, 1)
        self.assertEqual(self.selected_name(), "beta")

        model = self.press("s", "a")
        self.assertEqual(model.panes[0].marked_count, 7)
        model = self.press("n")
        self.assertEqual(model.panes[0].marked_count, 0)

    def test_escape_from_overlay_returns_to_base_and_clears_marks(self) -> None:
        self.press("SPACE", "SPACE")
        model = self.press("ESC")
        self.assertIs(model.mode, Mode.NORMAL)
        self.assertEqual(model.panes[0].marked_count, 0)

    def test_help_toggles(self) -> None:
        self.assertTrue(self.press("?").help_lines)
        self.assertEqual(self.press("?").help_lines, ())

    def test_hidden_toggle_persists_preference(self) -> None:
        (self.root / ".secret").write_text("s", encoding="utf-8")
        model = self.press(".")
        self.assertIn(".secret", [entry.name for entry in self.cursor.entries])
        self.assertEqual(self.save_preferences.call_args.args[0].show_hidden, True)
        self.assertEqual(model.advisories[0].level, "info")

    def test_quit_sets_exit_action_and_ignores_later_keys(self) -> None:
        model = self.press("q")
        self.assertIs(model.exit_action.kind, ExitKind.QUIT)
        model = self.press("j")
        self.assertEqual(model.panes[0].selected_index, 0)

    def test_shell_request_and_resume(self) -> None:
        model = self.press("S")
        self.assertIs(model.exit_action.kind, ExitKind.SPAWN_SHELL)
        self.assertEqual(model.exit_action.path, self.root)
        (self.root / "created_in_shell.txt").write_text("x", encoding="utf-8")
        model = self.dispatcher.resume_after_shell()
        self.assertIsNone(model.exit_action)
        self.assertIn("created_in_shell.txt", [entry.name for entry in self.cursor.entries])

    def test_vanished_directory_becomes_advisory(self) -> None:
        self.press("j", "ENTER")
        os.rmdir(self.root / "beta")
        model = self.press("r")
        self.assertEqual(self.cursor.path, self.root)
        self.assertEqual(model.advisories[0].kind, ErrorKind.NOT_FOUND)


class EditorGatingTests(DispatcherTestCase):
    def test_editors_require_root(self) -> None:
        for key in ("c", "o"):
            model = self.press(key)
            self.assertIs(model.mode, Mode.NORMAL)
            self.assertIn("require root", model.advisories[0].message)

    def test_multi_select_editor_keys_are_gated_too(self) -> None:
        self.press("SPACE")
        model = self.press("c")
        self.assertIs(model.mode, Mode.MULTI_SELECT)
        self.assertEqual(model.panes[0].marked_count, 1)


class ElevatedEditorTests(DispatcherTestCase):
    elevated = True

    def test_permission_editor_applies_typed_digits(self) -> None:
        target = self.root / "file0.txt"
        os.chmod(target, 0o644)
        self.press("j", "j")
        model = self.press("c")
        self.assertIs(model.mode, Mode.PERMISSION_EDIT)
        self.assertTrue(model.overlay.title.endswith("file0.txt"))

        model = self.press("6", "0", "0", "ENTER")
        self.assertIs(model.mode, Mode.NORMAL)
        self.assertEqual(stat.S_IMODE(os.stat(target).st_mode), 0o600)
        self.assertEqual(model.advisories[0].message, "chmod 600: 1 ok")

    def test_invalid_digit_becomes_warning_advisory(self) -> None:
        self.press("c")
        model = self.press("9")
        self.assertIs(model.mode, Mode.PERMISSION_EDIT)
        self.assertEqual(model.advisories[0].kind, ErrorKind.INVALID_INPUT)
        self.assertEqual(model.advisories[0].level, "warning")

    def test_marked_entries_are_edit_targets(self) -> None:
        self.press("j", "j", "SPACE", "SPACE")
        model = self.press("c")
        self.assertIs(model.mode, Mode.PERMISSION_EDIT)
        self.assertEqual(model.overlay.title, "Permissions: 2 entries")

    def test_ownership_editor_plans_then_applies(self) -> None:
        self.press("j", "j")
        self.press("o")
        self.type_text("root")
        self.press("TAB")
        self.type_text("users")
        model = self.press("ENTER")
        self.assertIs(model.mode, Mode.OWNERSHIP_EDIT)
        self.assertIn("1 change(s):", model.overlay.lines[0])

        model = self.press("y")
        self.assertIs(model.mode, Mode.NORMAL)
        self.assertEqual(self.chown_calls, [(self.root / "file0.txt", 0, 100)])

    def test_ownership_confirmation_can_go_back(self) -> None:
        self.press("o", "ENTER")
        model = self.press("n")
        self.assertIs(model.mode, Mode.OWNERSHIP_EDIT)
        self.assertEqual(self.chown_calls, [])


class PatternAndSearchTests(DispatcherTestCase):
    def test_pattern_marks_matches_and_enter_keeps_them(self) -> None:
        model = self.press("p")
        self.assertIs(model.mode, Mode.PATTERN_SELECT)
        model = self.type_text("*.txt")
        self.assertEqual(model.panes[0].marked_count, 5)
        model = self.press("BACKSPACE", "BACKSPACE", "BACKSPACE", "BACKSPACE", "BACKSPACE")
        self.assertEqual(model.panes[0].marked_count, 0)
        self.type_text("^file[12]")
        model = self.press("ENTER")
        self.assertIs(model.mode, Mode.MULTI_SELECT)
        self.assertEqual(model.panes[0].marked_count, 2)

    def test_search_enter_keeps_selection(self) -> None:
        self.press("/")
        model = self.type_text("file3")
        self.assertIs(model.mode, Mode.SEARCH)
        self.assertEqual(self.selected_name(), "file3.txt")
        model = self.press("ENTER")
        self.assertIs(model.mode, Mode.NORMAL)
        self.assertEqual(self.selected_name(), "file3.txt")

    def test_search_escape_restores_origin(self) -> None:
        self.press("j", "/")
        self.type_text("file")
        self.press("DOWN")
        self.assertEqual(self.selected_name(), "file1.txt")
        self.press("ESC")
        self.assertEqual(self.selected_name(), "beta")

    def test_preview_opens_and_closes(self) -> None:
        self.press("j", "j")
        model = self.press("v")
        self.assertIs(model.mode, Mode.PREVIEW)
        self.assertIsNotNone(model.overlay)
        self.assertIn("line 0", model.overlay.lines)
        model = self.press("q")
        self.assertIs(model.mode, Mode.NORMAL)
        self.assertIsNone(model.overlay)


if __name__ == "__main__":
    unittest.main()
