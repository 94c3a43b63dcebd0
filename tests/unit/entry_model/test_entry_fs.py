"""Entry snapshot, formatting and filesystem listing tests.

Covers ordering, hidden-file filtering, symlink handling and the no-follow
subtree walk used by recursive ownership changes.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from fsnav.entry_model import (
    Entry,
    EntryKind,
    format_mode,
    format_permissions,
    format_size,
    list_directory,
    read_entry,
    sort_key,
    special_type_name,
    walk_subtree,
)


class FormattingTests(unittest.TestCase):
    def test_format_permissions_renders_nine_bits(self) -> None:
        self.assertEqual(format_permissions(0o755), "rwxr-xr-x")
        self.assertEqual(format_permissions(0o640), "rw-r-----")
        self.assertEqual(format_permissions(0), "---------")

    def test_format_size_uses_bytes_then_two_decimals(self) -> None:
        self.assertEqual(format_size(0), "0 B")
        self.assertEqual(format_size(512), "512 B")
        self.assertEqual(format_size(1536), "1.50 KB")
        self.assertEqual(format_size(3 * 1024 * 1024), "3.00 MB")

    def test_format_mode_prefixes_type_character(self) -> None:
        directory = Entry(name="d", path=Path("/d"), kind=EntryKind.DIRECTORY, mode_bits=0o755)
        link = Entry(name="l", path=Path("/l"), kind=EntryKind.SYMLINK, mode_bits=0o777)
        regular = Entry(name="f", path=Path("/f"), kind=EntryKind.FILE, mode_bits=0o644)
        self.assertEqual(format_mode(directory), "drwxr-xr-x")
        self.assertEqual(format_mode(link), "lrwxrwxrwx")
        self.assertEqual(format_mode(regular), "-rw-r--r--")

    def test_octal_triple_splits_permission_bits(self) -> None:
        entry = Entry(name="f", path=Path("/f"), kind=EntryKind.FILE, mode_bits=0o4751)
        self.assertEqual(entry.octal_triple, (7, 5, 1))

    def test_sort_key_puts_directories_first_then_case_insensitive_name(self) -> None:
        entries = [
            Entry(name="b.txt", path=Path("/b.txt"), kind=EntryKind.FILE),
            Entry(name="Zdir", path=Path("/Zdir"), kind=EntryKind.DIRECTORY),
            Entry(name="A.txt", path=Path("/A.txt"), kind=EntryKind.FILE),
            Entry(name="adir", path=Path("/adir"), kind=EntryKind.DIRECTORY),
        ]
        self.assertEqual([entry.name for entry in sorted(entries, key=sort_key)], ["adir", "Zdir", "A.txt", "b.txt"])


class ListDirectoryTests(unittest.TestCase):
    def test_lists_sorted_and_hides_dotfiles_unless_requested(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "zeta.txt").write_text("z", encoding="utf-8")
            (root / "Alpha.txt").write_text("a", encoding="utf-8")
            (root / "sub").mkdir()
            (root / ".hidden").write_text("h", encoding="utf-8")

            entries, error = list_directory(root)
            self.assertIsNone(error)
            self.assertEqual([entry.name for entry in entries], ["sub", "Alpha.txt", "zeta.txt"])

            entries, error = list_directory(root, show_hidden=True)
            self.assertIsNone(error)
            self.assertIn(".hidden", [entry.name for entry in entries])

    def test_missing_directory_returns_error_instead_of_raising(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            entries, error = list_directory(Path(tmp) / "gone")
        self.assertEqual(entries, [])
        self.assertIsInstance(error, FileNotFoundError)

    def test_symlink_to_directory_is_navigable_but_keeps_link_kind(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "real").mkdir()
            os.symlink(root / "real", root / "link")

            entry = read_entry(root / "link")
            self.assertIs(entry.kind, EntryKind.SYMLINK)
            self.assertTrue(entry.is_navigable)
            self.assertEqual(entry.link_target, root / "real")

    def test_walk_subtree_yields_links_without_following_them(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp) / "top"
            (root / "a").mkdir(parents=True)
            (root / "a" / "f.txt").write_text("x", encoding="utf-8")
            outside = Path(tmp) / "outside"
            outside.mkdir()
            (outside / "secret.txt").write_text("s", encoding="utf-8")
            os.symlink(outside, root / "escape")

            walked = list(walk_subtree(root))

        self.assertEqual(walked[0], root)
        self.assertIn(root / "a" / "f.txt", walked)
        self.assertIn(root / "escape", walked)
        self.assertNotIn(root / "escape" / "secret.txt", walked)
        self.assertLess(walked.index(root / "a"), walked.index(root / "a" / "f.txt"))

    def test_walk_subtree_follows_browser_ordering(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp) / "top"
            root.mkdir()
            (root / "a.txt").write_text("a", encoding="utf-8")
            (root / "Zdir").mkdir()
            (root / "Zdir" / "inner.txt").write_text("i", encoding="utf-8")
            (root / ".hidden").write_text("h", encoding="utf-8")

            walked = [path.relative_to(root).as_posix() for path in walk_subtree(root)]

        self.assertEqual(walked, [".", "Zdir", "Zdir/inner.txt", ".hidden", "a.txt"])

    def test_regular_flag_tracks_what_can_be_read(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "plain.txt").write_text("x", encoding="utf-8")
            (root / "sub").mkdir()
            os.symlink(root / "plain.txt", root / "to_plain")
            os.symlink(root / "sub", root / "to_sub")

            self.assertTrue(read_entry(root / "plain.txt").is_regular)
            self.assertFalse(read_entry(root / "sub").is_regular)
            self.assertTrue(read_entry(root / "to_plain").is_regular)
            self.assertFalse(read_entry(root / "to_sub").is_regular)

    @unittest.skipUnless(hasattr(os, "mkfifo"), "needs named pipes")
    def test_named_pipe_is_listed_but_not_regular(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            os.mkfifo(root / "pipe")
            entries, error = list_directory(root)

            self.assertIsNone(error)
            self.assertEqual([entry.name for entry in entries], ["pipe"])
            self.assertIs(entries[0].kind, EntryKind.FILE)
            self.assertFalse(entries[0].is_regular)
            self.assertEqual(special_type_name(root / "pipe"), "named pipe")


if __name__ == "__main__":
    unittest.main()
