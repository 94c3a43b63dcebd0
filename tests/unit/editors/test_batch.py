from __future__ import annotations

import errno
import unittest
from pathlib import Path

from fsnav.editors import BatchResult, TargetOutcome, run_batch
from fsnav.errors import ErrorKind


def _fail_on(*names: str):
    def apply(path: Path) -> None:
        if path.name in names:
            raise PermissionError(errno.EACCES, "Permission denied", str(path))

    return apply


class RunBatchTests(unittest.TestCase):
    def test_all_success_gives_info_advisory(self) -> None:
        result = run_batch("chmod 755", [Path("/x/a"), Path("/x/b")], _fail_on())
        self.assertEqual(len(result.succeeded), 2)
        self.assertFalse(result.is_partial_failure)
        self.assertEqual(result.summary(), "chmod 755: 2 ok")
        self.assertEqual(result.advisory().level, "info")

    def test_failures_do_not_stop_remaining_targets(self) -> None:
        result = run_batch("chmod 600", [Path("/x/a"), Path("/x/b"), Path("/x/c")], _fail_on("a"))
        self.assertEqual([outcome.path.name for outcome in result.succeeded], ["b", "c"])
        self.assertEqual(result.failed[0].error_kind, ErrorKind.PERMISSION_DENIED)
        self.assertEqual(result.failed[0].message, "Permission denied")
        self.assertIn("1 failed (a: Permission denied)", result.summary())

    def test_total_failure_keeps_common_error_kind(self) -> None:
        result = run_batch("chmod 600", [Path("/x/a"), Path("/x/b")], _fail_on("a", "b"))
        advisory = result.advisory()
        self.assertEqual(advisory.level, "error")
        self.assertEqual(advisory.kind, ErrorKind.PERMISSION_DENIED)

    def test_summary_truncates_long_failure_lists(self) -> None:
        outcomes = tuple(
            TargetOutcome(path=Path(f"/x/f{idx}"), ok=False, error_kind=ErrorKind.OTHER, message="boom")
            for idx in range(5)
        )
        summary = BatchResult(action="chown", outcomes=outcomes).summary()
        self.assertTrue(summary.startswith("chown: 0 ok, 5 failed"))
        self.assertIn("+2 more", summary)


if __name__ == "__main__":
    unittest.main()
