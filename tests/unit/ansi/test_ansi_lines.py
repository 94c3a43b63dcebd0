"""ANSI-aware width, clipping and wrapping tests."""

from __future__ import annotations

import unittest

from fsnav.ansi import clip_ansi_line, display_width, pad_ansi_line, strip_ansi, wrap_ansi_line

RED = "\033[31m"
RESET = "\033[0m"


class AnsiWidthTests(unittest.TestCase):
    def test_escape_sequences_take_no_columns(self) -> None:
        self.assertEqual(display_width(f"{RED}abc{RESET}"), 3)
        self.assertEqual(strip_ansi(f"{RED}abc{RESET}"), "abc")

    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(display_width("日本"), 4)
        self.assertEqual(display_width("é"), 1)

    def test_tabs_expand_to_next_stop(self) -> None:
        self.assertEqual(display_width("ab\tc"), 9)


class AnsiClipWrapTests(unittest.TestCase):
    def test_clip_keeps_escapes_and_stops_at_width(self) -> None:
        self.assertEqual(clip_ansi_line(f"{RED}abcdef{RESET}", 3), f"{RED}abc")
        self.assertEqual(clip_ansi_line("日本語", 3), "日")
        self.assertEqual(clip_ansi_line("abc", 0), "")

    def test_pad_fills_to_width(self) -> None:
        self.assertEqual(pad_ansi_line("ab", 4), "ab  ")
        self.assertEqual(pad_ansi_line("abcdef", 4), "abcd")

    def test_wrap_splits_rows(self) -> None:
        self.assertEqual(wrap_ansi_line("abcdefg", 3), ["abc", "def", "g"])
        self.assertEqual(wrap_ansi_line("", 3), [""])
        self.assertEqual(wrap_ansi_line("日本語", 4), ["日本", "語"])

    def test_wrap_keeps_every_escape_in_stream_order(self) -> None:
        rows = wrap_ansi_line(f"ab{RED}cd{RESET}", 2)
        self.assertEqual(rows, [f"ab{RED}", f"cd{RESET}"])
        self.assertEqual("".join(rows), f"ab{RED}cd{RESET}")


if __name__ == "__main__":
    unittest.main()
