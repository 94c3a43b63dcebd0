"""Per-target outcome lists for batch metadata changes.

A batch is never all-or-nothing: each target is attempted independently and
its outcome recorded, so the caller can report successes and failures side by
side without control-flow exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from ..errors import Advisory, ErrorKind, describe_error, error_kind_for

logger = logging.getLogger(__name__)

SUMMARY_FAILURE_DETAILS = 3


@dataclass(frozen=True)
class TargetOutcome:
    path: Path
    ok: bool
    error_kind: ErrorKind | None = None
    message: str = ""


@dataclass(frozen=True)
class BatchResult:
    action: str
    outcomes: tuple[TargetOutcome, ...]

    @property
    def succeeded(self) -> tuple[TargetOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> tuple[TargetOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.ok)

    @property
    def is_partial_failure(self) -> bool:
        return bool(self.failed) and bool(self.succeeded)

    def summary(self) -> str:
        ok_count = len(self.succeeded)
        failed = self.failed
        text = f"{self.action}: {ok_count} ok"
        if not failed:
            return text
        details = ", ".join(f"{outcome.path.name}: {outcome.message}" for outcome in failed[:SUMMARY_FAILURE_DETAILS])
        if len(failed) > SUMMARY_FAILURE_DETAILS:
            details += f", +{len(failed) - SUMMARY_FAILURE_DETAILS} more"
        return f"{text}, {len(failed)} failed ({details})"

    def advisory(self) -> Advisory:
        if not self.failed:
            return Advisory.info(self.summary())
        if self.is_partial_failure:
            return Advisory.warning(self.summary(), kind=ErrorKind.PARTIAL_BATCH_FAILURE)
        kinds = {outcome.error_kind for outcome in self.failed}
        kind = kinds.pop() if len(kinds) == 1 else ErrorKind.PARTIAL_BATCH_FAILURE
        return Advisory.error(self.summary(), kind=kind)


def run_batch(action: str, targets: Iterable[Path], apply: Callable[[Path], None]) -> BatchResult:
    """Call ``apply`` for every target, recording each outcome independently."""
    outcomes: list[TargetOutcome] = []
    for path in targets:
        try:
            apply(path)
        except OSError as exc:
            logger.warning("%s failed for %s: %s", action, path, exc)
            outcomes.append(
                TargetOutcome(path=path, ok=False, error_kind=error_kind_for(exc), message=describe_error(exc))
            )
            continue
        outcomes.append(TargetOutcome(path=path, ok=True))
    result = BatchResult(action=action, outcomes=tuple(outcomes))
    logger.info(result.summary())
    return result


__all__ = ["BatchResult", "TargetOutcome", "run_batch"]
