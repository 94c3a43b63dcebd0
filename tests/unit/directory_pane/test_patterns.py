from __future__ import annotations

import unittest

from fsnav.directory_pane import is_glob, match_pattern


class MatchPatternTests(unittest.TestCase):
    def test_glob_matches_whole_name(self) -> None:
        self.assertTrue(is_glob("*.py"))
        self.assertTrue(match_pattern("*.py", "main.py"))
        self.assertFalse(match_pattern("*.py", "main.pyc"))
        self.assertTrue(match_pattern("file?.txt", "file1.txt"))

    def test_regex_is_searched_anywhere(self) -> None:
        self.assertTrue(match_pattern(r"^test_\w+", "test_cursor.py"))
        self.assertFalse(match_pattern(r"^test_", "cursor_test.py"))

    def test_invalid_regex_falls_back_to_substring(self) -> None:
        self.assertTrue(match_pattern("a[b", "xa[by"))
        self.assertFalse(match_pattern("a[b", "ab"))

    def test_empty_pattern_matches_nothing(self) -> None:
        self.assertFalse(match_pattern("", "anything"))


if __name__ == "__main__":
    unittest.main()
