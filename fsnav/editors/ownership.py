"""Ownership edit session: user/group pickers, confirmation plan and apply.

Catalogs are read once per session from the account databases. Each picker has
its own case-insensitive name filter. Committing is two-step: ``plan`` expands
the targets (recursively when requested, never following symlinks) into the
full list of changes shown for confirmation, and ``apply`` performs exactly
that list.
"""

from __future__ import annotations

import grp
import logging
import pwd
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..entry_model import Entry, FilesystemOps
from ..errors import InvalidInputError, describe_error, error_kind_for
from .batch import BatchResult, TargetOutcome, run_batch

logger = logging.getLogger(__name__)

CRITICAL_DIRECTORIES = (
    "/etc",
    "/bin",
    "/sbin",
    "/usr/bin",
    "/usr/sbin",
    "/boot",
    "/lib",
    "/lib64",
    "/proc",
    "/sys",
    "/dev",
)


@dataclass(frozen=True)
class UserInfo:
    uid: int
    name: str
    full_name: str | None = None


@dataclass(frozen=True)
class GroupInfo:
    gid: int
    name: str


@dataclass(frozen=True)
class OwnershipChange:
    path: Path
    old_uid: int
    old_gid: int
    new_uid: int
    new_gid: int

    @property
    def is_noop(self) -> bool:
        return self.old_uid == self.new_uid and self.old_gid == self.new_gid


class Focus(Enum):
    USERS = "users"
    GROUPS = "groups"
    OPTIONS = "options"
    CONFIRM = "confirm"


_FOCUS_CYCLE = (Focus.USERS, Focus.GROUPS, Focus.OPTIONS)


def load_users() -> list[UserInfo]:
    """Return every account, sorted by name; gecos supplies the full name."""
    users: list[UserInfo] = []
    for record in pwd.getpwall():
        full_name = record.pw_gecos.split(",", 1)[0].strip() or None
        users.append(UserInfo(uid=record.pw_uid, name=record.pw_name, full_name=full_name))
    users.sort(key=lambda user: user.name)
    return users


def load_groups() -> list[GroupInfo]:
    groups = [GroupInfo(gid=record.gr_gid, name=record.gr_name) for record in grp.getgrall()]
    groups.sort(key=lambda group: group.name)
    return groups


def is_critical_path(path: Path) -> bool:
    text = str(path)
    return any(text == root or text.startswith(root + "/") for root in CRITICAL_DIRECTORIES)


def critical_path_warnings(paths: Sequence[Path]) -> list[str]:
    return [f"{path} is in a critical system directory!" for path in paths if is_critical_path(path)]


def filter_by_name(items: Sequence, query: str) -> list:
    """Case-insensitive substring filter on the ``name`` attribute."""
    needle = query.lower()
    if not needle:
        return list(items)
    return [item for item in items if needle in item.name.lower()]


class OwnershipSession:
    def __init__(
        self,
        targets: Sequence[Entry],
        fs: FilesystemOps | None = None,
        *,
        users_loader: Callable[[], list[UserInfo]] = load_users,
        groups_loader: Callable[[], list[GroupInfo]] = load_groups,
    ) -> None:
        self.targets: tuple[Entry, ...] = tuple(targets)
        self.fs = fs if fs is not None else FilesystemOps()
        self.users = users_loader()
        self.groups = groups_loader()
        self.user_filter = ""
        self.group_filter = ""
        self.user_index = 0
        self.group_index = 0
        self.recursive = False
        self.focus = Focus.USERS
        self.planned: tuple[OwnershipChange, ...] = ()
        self.plan_failures: list[TargetOutcome] = []
        self.warnings = critical_path_warnings([entry.path for entry in self.targets])

        if self.targets:
            first = self.targets[0]
            self._select_by(self.filtered_users, lambda user: user.uid == first.uid, "user_index")
            self._select_by(self.filtered_groups, lambda group: group.gid == first.gid, "group_index")

    def _select_by(self, items: list, predicate: Callable, attr: str) -> None:
        for idx, item in enumerate(items):
            if predicate(item):
                setattr(self, attr, idx)
                return

    # -- pickers -----------------------------------------------------------

    @property
    def filtered_users(self) -> list[UserInfo]:
        return filter_by_name(self.users, self.user_filter)

    @property
    def filtered_groups(self) -> list[GroupInfo]:
        return filter_by_name(self.groups, self.group_filter)

    @property
    def selected_user(self) -> UserInfo | None:
        users = self.filtered_users
        if not users:
            return None
        return users[min(self.user_index, len(users) - 1)]

    @property
    def selected_group(self) -> GroupInfo | None:
        groups = self.filtered_groups
        if not groups:
            return None
        return groups[min(self.group_index, len(groups) - 1)]

    @property
    def filter_text(self) -> str:
        """Filter of the focused list; empty when no list has focus."""
        if self.focus is Focus.USERS:
            return self.user_filter
        if self.focus is Focus.GROUPS:
            return self.group_filter
        return ""

    def set_filter(self, text: str) -> None:
        """Replace the focused list's filter and reset its selection."""
        if self.focus is Focus.USERS:
            self.user_filter = text
            self.user_index = 0
        elif self.focus is Focus.GROUPS:
            self.group_filter = text
            self.group_index = 0

    def type_char(self, ch: str) -> None:
        self.set_filter(self.filter_text + ch)

    def backspace(self) -> None:
        self.set_filter(self.filter_text[:-1])

    def move(self, delta: int) -> None:
        if self.focus is Focus.USERS:
            count = len(self.filtered_users)
            if count:
                self.user_index = max(0, min(count - 1, self.user_index + delta))
        elif self.focus is Focus.GROUPS:
            count = len(self.filtered_groups)
            if count:
                self.group_index = max(0, min(count - 1, self.group_index + delta))

    def cycle_focus(self) -> None:
        if self.focus is Focus.CONFIRM:
            return
        position = _FOCUS_CYCLE.index(self.focus)
        self.focus = _FOCUS_CYCLE[(position + 1) % len(_FOCUS_CYCLE)]

    def toggle_recursive(self) -> None:
        self.recursive = not self.recursive

    # -- plan / confirm / apply ---------------------------------------------

    def plan(self) -> tuple[OwnershipChange, ...]:
        """Expand targets into the confirmation list and move focus to CONFIRM."""
        user = self.selected_user
        group = self.selected_group
        if user is None or group is None:
            raise InvalidInputError("Select both a user and a group")

        self.plan_failures = []
        self.warnings = []
        changes: list[OwnershipChange] = []
        seen: set[Path] = set()
        for path in self._expanded_paths():
            if path in seen:
                continue
            seen.add(path)
            try:
                entry = self.fs.read_entry(path)
            except OSError as exc:
                logger.info("cannot stat %s while planning chown: %s", path, exc)
                self._record_failure(path, exc)
                continue
            changes.append(
                OwnershipChange(
                    path=entry.path,
                    old_uid=entry.uid,
                    old_gid=entry.gid,
                    new_uid=user.uid,
                    new_gid=group.gid,
                )
            )

        self.planned = tuple(changes)
        self.warnings = critical_path_warnings([change.path for change in self.planned]) + self.warnings
        self.focus = Focus.CONFIRM
        return self.planned

    def _expanded_paths(self):
        for entry in self.targets:
            if self.recursive and entry.is_dir:
                yield from self.fs.walk(entry.path, on_error=self._note_walk_error)
            else:
                yield entry.path

    def _note_walk_error(self, path: Path, exc: OSError) -> None:
        logger.info("cannot descend into %s: %s", path, exc)
        self.warnings.append(f"{path}: contents skipped ({describe_error(exc)})")

    def _record_failure(self, path: Path, exc: OSError) -> None:
        if any(outcome.path == path for outcome in self.plan_failures):
            return
        self.plan_failures.append(
            TargetOutcome(path=path, ok=False, error_kind=error_kind_for(exc), message=describe_error(exc))
        )

    def back_to_pickers(self) -> None:
        self.planned = ()
        self.focus = Focus.USERS

    def apply(self) -> BatchResult:
        """Apply the confirmed plan; each path succeeds or fails on its own."""
        if self.focus is not Focus.CONFIRM:
            raise InvalidInputError("Ownership changes must be confirmed first")
        user = self.selected_user
        group = self.selected_group
        label = f"chown {user.name if user else '?'}:{group.name if group else '?'}"
        by_path = {change.path: change for change in self.planned}
        result = run_batch(
            label,
            (change.path for change in self.planned),
            lambda path: self.fs.lchown(path, by_path[path].new_uid, by_path[path].new_gid),
        )
        if not self.plan_failures:
            return result
        # Paths that could not be read while planning count as failed targets.
        return BatchResult(action=result.action, outcomes=result.outcomes + tuple(self.plan_failures))


__all__ = [
    "CRITICAL_DIRECTORIES",
    "Focus",
    "GroupInfo",
    "OwnershipChange",
    "OwnershipSession",
    "UserInfo",
    "critical_path_warnings",
    "filter_by_name",
    "is_critical_path",
    "load_groups",
    "load_users",
]
