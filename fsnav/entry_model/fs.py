"""Filesystem collaborator: listing, metadata reads and metadata writes.

Reads never raise for the common recoverable cases; they return the error next
to the (possibly empty) result so callers can turn it into an advisory. Writes
raise ``OSError`` and are wrapped by the batch editors, which record one outcome
per target.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .types import Entry, EntryKind, sort_key

logger = logging.getLogger(__name__)


def _entry_from_stat(name: str, path: Path, st: os.stat_result) -> Entry:
    mode = st.st_mode
    link_target: Path | None = None
    target_is_dir = False
    is_regular = stat.S_ISREG(mode)
    if stat.S_ISLNK(mode):
        kind = EntryKind.SYMLINK
        try:
            link_target = Path(os.readlink(path))
        except OSError:
            link_target = None
        try:
            target_mode = os.stat(path).st_mode
        except OSError:
            target_mode = 0
        target_is_dir = stat.S_ISDIR(target_mode)
        is_regular = stat.S_ISREG(target_mode)
    elif stat.S_ISDIR(mode):
        kind = EntryKind.DIRECTORY
    else:
        kind = EntryKind.FILE
    return Entry(
        name=name,
        path=path,
        kind=kind,
        size_bytes=int(st.st_size),
        mode_bits=stat.S_IMODE(mode),
        uid=int(st.st_uid),
        gid=int(st.st_gid),
        link_target=link_target,
        target_is_dir=target_is_dir,
        is_regular=is_regular,
    )


SPECIAL_FILE_TYPES = (
    (stat.S_ISFIFO, "named pipe"),
    (stat.S_ISSOCK, "socket"),
    (stat.S_ISCHR, "character device"),
    (stat.S_ISBLK, "block device"),
)


def special_type_name(path: Path) -> str:
    """Describe a non-regular node without opening it."""
    try:
        mode = os.stat(path).st_mode
    except OSError:
        return "broken link"
    for predicate, name in SPECIAL_FILE_TYPES:
        if predicate(mode):
            return name
    return "special file"


def read_entry(path: Path) -> Entry:
    """Return a fresh snapshot of ``path`` without following a final symlink."""
    path = Path(os.path.abspath(path))
    st = os.lstat(path)
    return _entry_from_stat(path.name or str(path), path, st)


def list_directory(directory: Path, show_hidden: bool = False) -> tuple[list[Entry], OSError | None]:
    """List children of ``directory`` sorted directories-first, then by name.

    Returns ``(entries, scan_error)``. ``scan_error`` is set (and ``entries`` is
    empty) when the directory itself cannot be scanned. Children that vanish
    between the scan and their ``lstat`` are skipped.
    """
    directory = Path(os.path.abspath(directory))
    entries: list[Entry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    st = child.stat(follow_symlinks=False)
                except OSError as exc:
                    logger.debug("skipping %s: %s", child.path, exc)
                    continue
                entries.append(_entry_from_stat(name, directory / name, st))
    except OSError as exc:
        logger.info("cannot list %s: %s", directory, exc)
        return [], exc

    entries.sort(key=sort_key)
    return entries, None


def set_mode(path: Path, mode: int) -> None:
    """Set permission bits on ``path``."""
    os.chmod(path, mode)
    logger.debug("chmod %o %s", mode, path)


def set_owner(path: Path, uid: int, gid: int) -> None:
    """Change owner and group of ``path`` itself, never a symlink's target."""
    os.chown(path, uid, gid, follow_symlinks=False)
    logger.debug("chown %d:%d %s", uid, gid, path)


def walk_subtree(
    root: Path,
    on_error: Callable[[Path, OSError], None] | None = None,
) -> Iterator[Path]:
    """Yield ``root`` and every path below it, depth-first in listing order.

    Symlinks are yielded but never descended into, so the walk cannot escape
    the subtree or loop. Unreadable directories are reported to ``on_error``
    and skipped.
    """
    stack: list[Path] = [Path(root)]
    while stack:
        current = stack.pop()
        yield current
        try:
            st = os.lstat(current)
        except OSError as exc:
            if on_error is not None:
                on_error(current, exc)
            continue
        if not stat.S_ISDIR(st.st_mode):
            continue
        children, scan_error = list_directory(current, show_hidden=True)
        if scan_error is not None:
            if on_error is not None:
                on_error(current, scan_error)
            continue
        for child in reversed(children):
            stack.append(child.path)


def is_elevated() -> bool:
    """Whether the process runs as root, which unlocks the editors."""
    return hasattr(os, "geteuid") and os.geteuid() == 0


@dataclass(frozen=True)
class FilesystemOps:
    """Capability bundle handed to cursors and editors.

    Tests replace individual callables to inject failures.
    """

    list_directory: Callable[[Path, bool], tuple[list[Entry], OSError | None]] = list_directory
    read_entry: Callable[[Path], Entry] = read_entry
    chmod: Callable[[Path, int], None] = set_mode
    lchown: Callable[[Path, int, int], None] = set_owner
    walk: Callable[..., Iterator[Path]] = walk_subtree


__all__ = [
    "FilesystemOps",
    "is_elevated",
    "list_directory",
    "read_entry",
    "set_mode",
    "set_owner",
    "special_type_name",
    "walk_subtree",
]
