"""Frame building tests: exact row counts, split layouts and status rows."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from fsnav.ansi import display_width, strip_ansi
from fsnav.bookmarks import BookmarkStore
from fsnav.directory_pane import DirectoryCursor
from fsnav.dispatch import ModeDispatcher
from fsnav.errors import Advisory
from fsnav.runtime.screen import build_frame, build_status_line, fit, render_frame


class ScreenFrameTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        (self.root / "sub").mkdir()
        for idx in range(30):
            (self.root / f"f{idx:02d}.txt").write_text("x" * idx, encoding="utf-8")
        cursor, _ = DirectoryCursor.open(self.root)
        self.dispatcher = ModeDispatcher(cursor, BookmarkStore(), color=False)
        self.dispatcher.set_viewport(60, 12)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def plain(self, width: int = 60, height: int = 12) -> list[str]:
        return [strip_ansi(row) for row in build_frame(self.dispatcher.render(), width, height, color=False)]

    def test_frame_has_exact_height_and_width(self) -> None:
        rows = self.plain()
        self.assertEqual(len(rows), 12)
        self.assertTrue(all(display_width(row) == 60 for row in rows))
        self.assertTrue(rows[0].startswith("fsnav  "))
        self.assertIn("[31]", rows[1])
        self.assertIn("sub/", rows[2])
        self.assertTrue(rows[-2].startswith("normal  1/31"))
        self.assertTrue(rows[-2].rstrip().endswith("? help"))

    def test_selected_row_is_reverse_video(self) -> None:
        frame = build_frame(self.dispatcher.render(), 60, 12, color=False)
        self.assertTrue(frame[2].startswith("\033[7m"))
        self.assertFalse(frame[3].startswith("\033[7m"))

    def test_vertical_split_draws_divider(self) -> None:
        self.dispatcher.handle_input("w")
        rows = self.plain()
        self.assertEqual(len(rows), 12)
        self.assertTrue(all("│" in row for row in rows[1:-2]))
        self.assertIn("vertical 0.50", rows[-2])

    def test_horizontal_split_draws_divider_row(self) -> None:
        self.dispatcher.handle_input("w")
        self.dispatcher.handle_input("|")
        rows = self.plain()
        self.assertEqual(len(rows), 12)
        self.assertIn("─" * 60, rows)

    def test_overlay_replaces_body_with_footer_last(self) -> None:
        self.dispatcher.handle_input("/")
        rows = self.plain()
        self.assertEqual(rows[1].strip(), "Search")
        self.assertIn("Enter keep", rows[-3])

    def test_advisory_row_shows_messages(self) -> None:
        self.dispatcher.notify(Advisory.info("hello"))
        self.dispatcher.notify(Advisory.error("broken"))
        frame = build_frame(self.dispatcher.render(), 60, 12, color=False)
        self.assertIn("\033[1;31m", frame[-1])
        self.assertEqual(strip_ansi(frame[-1]).rstrip(), "hello  |  broken")

    def test_tiny_terminal_still_fills_height(self) -> None:
        rows = self.plain(width=10, height=5)
        self.assertEqual(len(rows), 5)

    def test_render_frame_clears_screen_first(self) -> None:
        text = render_frame(self.dispatcher.render(), 60, 12, color=False)
        self.assertTrue(text.startswith("\033[H\033[J"))
        self.assertEqual(text.count("\r\n"), 11)


class ScreenHelperTests(unittest.TestCase):
    def test_fit_pads_and_clips(self) -> None:
        self.assertEqual(fit("abc", 5), "abc  ")
        self.assertEqual(fit("abcdef", 3), "abc")
        self.assertEqual(fit("\033[1mab\033[0m", 3), "\033[1mab\033[0m\033[0m ")

    def test_status_line_keeps_right_text(self) -> None:
        self.assertEqual(build_status_line("left", 14), "left    ? help")
        self.assertEqual(build_status_line("a very long left side", 12), "a ver ? help")
        self.assertEqual(build_status_line("x", 3), "elp")


if __name__ == "__main__":
    unittest.main()
