from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fsnav.runtime import config
from fsnav.split import Orientation


class PreferencesConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "fsnav" / "config.json"
        patcher = mock.patch("fsnav.runtime.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_config_gives_defaults(self) -> None:
        self.assertEqual(config.load_preferences(), config.Preferences())

    def test_preferences_are_written_and_read_back(self) -> None:
        prefs = config.Preferences(show_hidden=True, split_ratio=0.65, split_orientation=Orientation.HORIZONTAL)
        config.save_preferences(prefs)
        self.assertEqual(config.load_preferences(), prefs)
        data = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(data["split_orientation"], "horizontal")

    def test_unknown_keys_survive_a_save(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text('{"theme": "dark"}', encoding="utf-8")
        config.save_preferences(config.Preferences(show_hidden=True))
        data = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(data["theme"], "dark")
        self.assertTrue(data["show_hidden"])

    def test_malformed_or_mistyped_values_fall_back(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("[1, 2", encoding="utf-8")
        self.assertEqual(config.load_preferences(), config.Preferences())

        self.config_path.write_text(
            '{"show_hidden": "yes", "split_ratio": true, "split_orientation": "diagonal"}',
            encoding="utf-8",
        )
        self.assertEqual(config.load_preferences(), config.Preferences())

    def test_ratio_is_clamped_on_load(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text('{"split_ratio": 0.99}', encoding="utf-8")
        self.assertAlmostEqual(config.load_preferences().split_ratio, 0.8)

    def test_save_failure_is_not_raised(self) -> None:
        blocker = Path(self._tmp.name) / "blocker"
        blocker.write_text("file, not a directory", encoding="utf-8")
        with mock.patch("fsnav.runtime.config.CONFIG_PATH", blocker / "config.json"):
            with self.assertLogs("fsnav.runtime.config", level="WARNING"):
                config.save_config({"show_hidden": True})


if __name__ == "__main__":
    unittest.main()
