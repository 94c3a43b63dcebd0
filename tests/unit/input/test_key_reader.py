"""Key decoding tests fed through a pipe instead of a terminal."""

from __future__ import annotations

import os
import unittest

from fsnav.input import read_key


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.read_fd, self.write_fd = os.pipe()

    def tearDown(self) -> None:
        os.close(self.read_fd)
        if self.write_fd is not None:
            os.close(self.write_fd)

    def _feed(self, data: bytes) -> None:
        os.write(self.write_fd, data)

    def test_printable_and_control_bytes(self) -> None:
        self._feed(b"q \r\t\x7f\x12")
        self.assertEqual(
            [read_key(self.read_fd) for _ in range(6)],
            ["q", "SPACE", "ENTER", "TAB", "BACKSPACE", "CTRL_R"],
        )

    def test_csi_and_ss3_sequences(self) -> None:
        self._feed(b"\x1b[A\x1b[B\x1b[5~\x1b[6~\x1b[15~\x1b[17~\x1bOP\x1b[1;5C")
        self.assertEqual(
            [read_key(self.read_fd) for _ in range(8)],
            ["UP", "DOWN", "PAGE_UP", "PAGE_DOWN", "F5", "F6", "F1", "RIGHT"],
        )

    def test_lone_escape_times_out_to_esc(self) -> None:
        self._feed(b"\x1b")
        self.assertEqual(read_key(self.read_fd), "ESC")

    def test_escape_followed_by_plain_key_keeps_that_key(self) -> None:
        self._feed(b"\x1bx")
        self.assertEqual(read_key(self.read_fd), "ESC")
        self.assertEqual(read_key(self.read_fd), "x")

    def test_utf8_character_is_returned_whole(self) -> None:
        self._feed("é".encode("utf-8"))
        self.assertEqual(read_key(self.read_fd), "é")

    def test_timeout_and_end_of_input_return_empty(self) -> None:
        self.assertEqual(read_key(self.read_fd, timeout_ms=0), "")
        os.close(self.write_fd)
        self.write_fd = None
        self.assertEqual(read_key(self.read_fd), "")


if __name__ == "__main__":
    unittest.main()
