from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from fsnav.preview import ContentKind, classify, is_text_sample, mime_type_for


class ClassifyTests(unittest.TestCase):
    def test_text_sample_rules(self) -> None:
        self.assertTrue(is_text_sample(b"hello\nworld\n"))
        self.assertFalse(is_text_sample(b"abc\x00def"))
        self.assertFalse(is_text_sample(b"\xff\xfe\xfa"))

    def test_incomplete_multibyte_tail_is_still_text(self) -> None:
        sample = "café".encode("utf-8")[:-1]
        self.assertTrue(is_text_sample(sample))

    def test_mime_types_come_from_extension(self) -> None:
        self.assertEqual(mime_type_for(Path("a.py")), "text/x-python")
        self.assertEqual(mime_type_for(Path("PHOTO.JPG")), "image/jpeg")
        self.assertEqual(mime_type_for(Path("unknown.zzz")), "application/octet-stream")

    def test_classify_reads_content_for_non_images(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "notes").write_text("plain words\n", encoding="utf-8")
            (root / "blob").write_bytes(b"\x00\x01\x02")
            (root / "pic.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00")

            self.assertIs(classify(root / "notes"), ContentKind.TEXT)
            self.assertIs(classify(root / "blob"), ContentKind.BINARY)
            self.assertIs(classify(root / "pic.png"), ContentKind.IMAGE)

    def test_classify_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OSError):
                classify(Path(tmp) / "absent.txt")


if __name__ == "__main__":
    unittest.main()
