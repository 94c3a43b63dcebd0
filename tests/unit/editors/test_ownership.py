"""Ownership editor session tests with injected user/group catalogs."""

from __future__ import annotations

import errno
import os
import tempfile
import unittest
from pathlib import Path

from fsnav.editors import Focus, GroupInfo, OwnershipSession, UserInfo, critical_path_warnings
from fsnav.editors.ownership import filter_by_name, is_critical_path
from fsnav.entry_model import Entry, EntryKind, FilesystemOps, read_entry
from fsnav.errors import InvalidInputError

USERS = [
    UserInfo(uid=0, name="root", full_name="root"),
    UserInfo(uid=1000, name="alice", full_name="Alice Example"),
    UserInfo(uid=1001, name="bob", full_name=""),
]
GROUPS = [
    GroupInfo(gid=0, name="root"),
    GroupInfo(gid=100, name="users"),
    GroupInfo(gid=1000, name="alice"),
]


def _session(targets, fs=None) -> OwnershipSession:
    return OwnershipSession(targets, fs, users_loader=lambda: list(USERS), groups_loader=lambda: list(GROUPS))


def _file(path: Path, uid: int = 1000, gid: int = 1000) -> Entry:
    return Entry(name=path.name, path=path, kind=EntryKind.FILE, uid=uid, gid=gid)


class OwnershipPickerTests(unittest.TestCase):
    def test_initial_selection_is_first_target_owner(self) -> None:
        session = _session([_file(Path("/srv/a"), uid=1001, gid=100)])
        self.assertEqual(session.selected_user.name, "bob")
        self.assertEqual(session.selected_group.name, "users")

    def test_filter_is_case_insensitive_and_resets_selection(self) -> None:
        session = _session([_file(Path("/srv/a"), uid=1001)])
        session.type_char("A")
        self.assertEqual([user.name for user in session.filtered_users], ["alice"])
        self.assertEqual(session.user_index, 0)
        self.assertEqual(session.selected_user.name, "alice")
        session.backspace()
        self.assertEqual(len(session.filtered_users), 3)

    def test_tab_cycles_users_groups_options(self) -> None:
        session = _session([_file(Path("/srv/a"))])
        self.assertIs(session.focus, Focus.USERS)
        session.cycle_focus()
        self.assertIs(session.focus, Focus.GROUPS)
        session.type_char("r")
        self.assertEqual(session.group_filter, "r")
        self.assertEqual(session.user_filter, "")
        session.cycle_focus()
        self.assertIs(session.focus, Focus.OPTIONS)
        session.cycle_focus()
        self.assertIs(session.focus, Focus.USERS)

    def test_plan_without_user_match_is_invalid(self) -> None:
        session = _session([_file(Path("/srv/a"))])
        session.set_filter("nobody-matches")
        with self.assertRaises(InvalidInputError):
            session.plan()

    def test_filter_by_name_helper(self) -> None:
        self.assertEqual(filter_by_name(USERS, ""), USERS)
        self.assertEqual([user.name for user in filter_by_name(USERS, "O")], ["root", "bob"])


class OwnershipPlanTests(unittest.TestCase):
    def test_plan_lists_old_and_new_ids_and_moves_to_confirm(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "data.txt"
            target.write_text("x", encoding="utf-8")
            entry = read_entry(target)

            session = _session([entry])
            session.set_filter("bob")
            changes = session.plan()

        self.assertIs(session.focus, Focus.CONFIRM)
        self.assertEqual(len(changes), 1)
        self.assertEqual(changes[0].path, entry.path)
        self.assertEqual((changes[0].old_uid, changes[0].old_gid), (entry.uid, entry.gid))
        self.assertEqual(changes[0].new_uid, 1001)

    def test_recursive_plan_walks_subtree_without_following_links(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp) / "project"
            (root / "src").mkdir(parents=True)
            (root / "src" / "main.py").write_text("pass\n", encoding="utf-8")
            outside = Path(tmp) / "elsewhere"
            outside.mkdir()
            (outside / "other.txt").write_text("o", encoding="utf-8")
            os.symlink(outside, root / "link")

            session = _session([read_entry(root)])
            session.toggle_recursive()
            planned = [change.path for change in session.plan()]

        self.assertEqual(planned[0], root)
        self.assertIn(root / "src" / "main.py", planned)
        self.assertIn(root / "link", planned)
        self.assertNotIn(root / "link" / "other.txt", planned)

    def test_apply_requires_confirmation(self) -> None:
        session = _session([_file(Path("/srv/a"))])
        with self.assertRaises(InvalidInputError):
            session.apply()

    def test_apply_uses_lchown_per_path_with_independent_outcomes(self) -> None:
        a, b = Path("/srv/a"), Path("/srv/b")
        calls: list[tuple[Path, int, int]] = []

        def fake_lchown(path: Path, uid: int, gid: int) -> None:
            calls.append((path, uid, gid))
            if path == b:
                raise PermissionError(errno.EPERM, "Operation not permitted", str(path))

        fs = FilesystemOps(read_entry=lambda path: _file(Path(path)), lchown=fake_lchown)
        session = _session([_file(a), _file(b)], fs)
        session.set_filter("root")
        session.cycle_focus()
        session.set_filter("users")
        session.plan()
        result = session.apply()

        self.assertEqual(calls, [(a, 0, 100), (b, 0, 100)])
        self.assertEqual([outcome.path for outcome in result.succeeded], [a])
        self.assertEqual([outcome.path for outcome in result.failed], [b])

    def test_unreadable_target_is_reported_as_failure(self) -> None:
        missing = Path("/srv/missing")

        def fake_read(path: Path) -> Entry:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(path))

        session = _session([_file(missing)], FilesystemOps(read_entry=fake_read, lchown=lambda *_args: None))
        self.assertEqual(session.plan(), ())
        result = session.apply()
        self.assertEqual([outcome.path for outcome in result.failed], [missing])

    def test_back_to_pickers_clears_plan(self) -> None:
        session = _session([_file(Path("/srv/a"))], FilesystemOps(read_entry=lambda path: _file(Path(path))))
        session.plan()
        session.back_to_pickers()
        self.assertIs(session.focus, Focus.USERS)
        self.assertEqual(session.planned, ())


class CriticalPathTests(unittest.TestCase):
    def test_system_directories_are_flagged(self) -> None:
        self.assertTrue(is_critical_path(Path("/etc")))
        self.assertTrue(is_critical_path(Path("/usr/bin/env")))
        self.assertFalse(is_critical_path(Path("/home/alice")))
        self.assertFalse(is_critical_path(Path("/etcetera")))

    def test_warnings_are_built_for_critical_targets(self) -> None:
        warnings = critical_path_warnings([Path("/etc/hosts"), Path("/home/alice/notes")])
        self.assertEqual(len(warnings), 1)
        self.assertIn("/etc/hosts", warnings[0])

    def test_session_warns_for_critical_targets(self) -> None:
        session = _session([_file(Path("/etc/passwd"), uid=0, gid=0)])
        self.assertTrue(session.warnings)


if __name__ == "__main__":
    unittest.main()
