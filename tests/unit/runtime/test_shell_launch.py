from __future__ import annotations

import unittest
from pathlib import Path
from unittest import mock

from fsnav.runtime.shell import FALLBACK_SHELL, launch_shell, shell_command


class ShellLaunchTests(unittest.TestCase):
    def test_shell_command_uses_environment_or_fallback(self) -> None:
        with mock.patch.dict("os.environ", {"SHELL": "/usr/bin/zsh -l"}):
            self.assertEqual(shell_command(), ["/usr/bin/zsh", "-l"])
        with mock.patch.dict("os.environ", {"SHELL": "  "}):
            self.assertEqual(shell_command(), [FALLBACK_SHELL])

    def test_terminal_is_released_around_the_shell(self) -> None:
        events: list[str] = []

        def fake_run(cmd, cwd, check):
            events.append(f"run {cwd}")

        with mock.patch.dict("os.environ", {"SHELL": "/bin/bash"}), mock.patch(
            "fsnav.runtime.shell.subprocess.run", side_effect=fake_run
        ) as run:
            result = launch_shell(Path("/srv"), lambda: events.append("disable"), lambda: events.append("enable"))

        self.assertIsNone(result)
        self.assertEqual(events, ["disable", "run /srv", "enable"])
        self.assertEqual(run.call_args.args[0], ["/bin/bash"])

    def test_launch_failure_returns_message_and_restores_terminal(self) -> None:
        events: list[str] = []
        with mock.patch("fsnav.runtime.shell.subprocess.run", side_effect=FileNotFoundError(2, "No such file")):
            result = launch_shell(Path("/srv"), lambda: events.append("disable"), lambda: events.append("enable"))

        self.assertTrue(result.startswith("Failed to launch shell:"))
        self.assertEqual(events, ["disable", "enable"])


if __name__ == "__main__":
    unittest.main()
