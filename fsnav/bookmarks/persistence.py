"""JSON persistence for the bookmark store.

The file lives under the per-user config directory. Loading never raises: a
missing file gives an empty store, and an unreadable or malformed one gives an
empty store plus a ``STORE_CORRUPT`` advisory (the bad file is kept aside as
``bookmarks.json.corrupt``). Saves write a temporary file in the same directory
and ``os.replace`` it over the old one, so a crash never leaves half a file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from platformdirs import user_config_dir

from ..errors import Advisory, ErrorKind, StoreCorruptError
from .store import SHORTCUT_ORDER, Bookmark, BookmarkStore

logger = logging.getLogger(__name__)

APP_NAME = "fsnav"
BOOKMARKS_FILENAME = "bookmarks.json"
FORMAT_VERSION = 1
BOOKMARKS_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / BOOKMARKS_FILENAME


def bookmark_to_json(bookmark: Bookmark) -> dict[str, object]:
    return {
        "shortcut": bookmark.shortcut,
        "path": str(bookmark.path),
        "label": bookmark.label,
        "access_count": bookmark.access_count,
        "created_at": bookmark.created_at,
        "last_accessed": bookmark.last_accessed,
    }


def _number(value: object, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StoreCorruptError(f"bookmark field {field!r} is not a number")
    return float(value)


def bookmark_from_json(raw: object) -> Bookmark:
    """Decode one record; raises ``StoreCorruptError`` on any shape problem."""
    if not isinstance(raw, dict):
        raise StoreCorruptError("bookmark record is not an object")
    shortcut = raw.get("shortcut")
    path = raw.get("path")
    if not isinstance(shortcut, str) or shortcut not in SHORTCUT_ORDER:
        raise StoreCorruptError(f"invalid bookmark shortcut: {shortcut!r}")
    if not isinstance(path, str) or not path:
        raise StoreCorruptError("bookmark path missing")
    label = raw.get("label")
    access_count = raw.get("access_count", 0)
    if isinstance(access_count, bool) or not isinstance(access_count, int) or access_count < 0:
        raise StoreCorruptError("bookmark access_count is not a non-negative integer")
    last_accessed = raw.get("last_accessed")
    return Bookmark(
        shortcut=shortcut,
        path=Path(path),
        label=label if isinstance(label, str) and label else Path(path).name or path,
        access_count=access_count,
        created_at=_number(raw.get("created_at", 0.0), "created_at"),
        last_accessed=None if last_accessed is None else _number(last_accessed, "last_accessed"),
    )


def encode_bookmarks(bookmarks) -> str:
    data = {"version": FORMAT_VERSION, "bookmarks": [bookmark_to_json(item) for item in bookmarks]}
    return json.dumps(data, indent=2) + "\n"


def decode_bookmarks(text: str) -> list[Bookmark]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StoreCorruptError(f"not valid JSON ({exc.msg})") from exc
    if not isinstance(data, dict) or not isinstance(data.get("bookmarks"), list):
        raise StoreCorruptError("missing 'bookmarks' list")
    version = data.get("version", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise StoreCorruptError(f"unsupported bookmarks version {version!r}")
    bookmarks = [bookmark_from_json(raw) for raw in data["bookmarks"]]
    shortcuts = [item.shortcut for item in bookmarks]
    if len(set(shortcuts)) != len(shortcuts):
        raise StoreCorruptError("duplicate bookmark shortcuts")
    return bookmarks


def write_atomic(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` via a same-directory temp file and ``os.replace``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise


def save_bookmarks(store: BookmarkStore, path: Path | None = None) -> None:
    target = path if path is not None else BOOKMARKS_PATH
    write_atomic(target, encode_bookmarks(store.records()))
    logger.debug("saved %d bookmarks to %s", len(store), target)


def _set_aside(path: Path) -> Path | None:
    backup = path.with_name(path.name + ".corrupt")
    try:
        os.replace(path, backup)
    except OSError as exc:
        logger.warning("could not move corrupt bookmarks file %s aside: %s", path, exc)
        return None
    return backup


def load_bookmarks(path: Path | None = None) -> tuple[list[Bookmark], Advisory | None]:
    """Read bookmarks, degrading to an empty list instead of raising."""
    source = path if path is not None else BOOKMARKS_PATH
    try:
        text = source.read_text(encoding="utf-8")
    except FileNotFoundError:
        return [], None
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("cannot read bookmarks %s: %s", source, exc)
        return [], Advisory.warning(f"Bookmarks unreadable, starting empty: {exc}", kind=ErrorKind.STORE_CORRUPT)

    try:
        return decode_bookmarks(text), None
    except StoreCorruptError as exc:
        logger.warning("corrupt bookmarks file %s: %s", source, exc)
        backup = _set_aside(source)
        where = f" (kept as {backup.name})" if backup is not None else ""
        return [], Advisory.warning(
            f"Bookmarks file corrupt, starting empty{where}: {exc}",
            kind=ErrorKind.STORE_CORRUPT,
        )


def open_store(path: Path | None = None) -> tuple[BookmarkStore, Advisory | None]:
    """Load the store and wire it to save back to ``path`` after every change."""
    target = path if path is not None else BOOKMARKS_PATH
    bookmarks, advisory = load_bookmarks(target)
    store = BookmarkStore(bookmarks, persist=lambda current: save_bookmarks(current, target))
    return store, advisory


def export_bookmarks(store: BookmarkStore, path: Path) -> None:
    write_atomic(path, encode_bookmarks(store.records()))


def import_bookmarks(store: BookmarkStore, path: Path) -> int:
    """Merge bookmarks from another file; raises ``StoreCorruptError``/``OSError``."""
    return store.merge(decode_bookmarks(path.read_text(encoding="utf-8")))


__all__ = [
    "APP_NAME",
    "BOOKMARKS_PATH",
    "FORMAT_VERSION",
    "bookmark_from_json",
    "bookmark_to_json",
    "decode_bookmarks",
    "encode_bookmarks",
    "export_bookmarks",
    "import_bookmarks",
    "load_bookmarks",
    "open_store",
    "save_bookmarks",
    "write_atomic",
]
