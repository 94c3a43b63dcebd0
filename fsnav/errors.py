"""Error taxonomy and UI advisories.

Every recoverable failure is classified into an ``ErrorKind`` and surfaced to
the render model as an ``Advisory``. Exceptions defined here never escape the
mode dispatcher.
"""

from __future__ import annotations

import errno
from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    NOT_A_DIRECTORY = "not_a_directory"
    INVALID_INPUT = "invalid_input"
    PARTIAL_BATCH_FAILURE = "partial_batch_failure"
    STORE_CORRUPT = "store_corrupt"
    STORE_FULL = "store_full"
    OTHER = "other"


class FsnavError(Exception):
    """Base class for recoverable errors raised inside the core."""

    kind = ErrorKind.OTHER


class InvalidInputError(FsnavError):
    kind = ErrorKind.INVALID_INPUT


class StoreFullError(FsnavError):
    kind = ErrorKind.STORE_FULL


class StoreCorruptError(FsnavError):
    kind = ErrorKind.STORE_CORRUPT


_ERRNO_KINDS = {
    errno.ENOENT: ErrorKind.NOT_FOUND,
    errno.EACCES: ErrorKind.PERMISSION_DENIED,
    errno.EPERM: ErrorKind.PERMISSION_DENIED,
    errno.ENOTDIR: ErrorKind.NOT_A_DIRECTORY,
}


def error_kind_for(exc: BaseException) -> ErrorKind:
    """Map an exception (usually ``OSError``) onto the error taxonomy."""
    if isinstance(exc, FsnavError):
        return exc.kind
    if isinstance(exc, FileNotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(exc, PermissionError):
        return ErrorKind.PERMISSION_DENIED
    if isinstance(exc, NotADirectoryError):
        return ErrorKind.NOT_A_DIRECTORY
    if isinstance(exc, OSError) and exc.errno is not None:
        return _ERRNO_KINDS.get(exc.errno, ErrorKind.OTHER)
    return ErrorKind.OTHER


def describe_error(exc: BaseException) -> str:
    """Return a short human-readable reason for ``exc``."""
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    text = str(exc).strip()
    return text or exc.__class__.__name__


@dataclass(frozen=True)
class Advisory:
    """One message for the status area of the render model."""

    message: str
    level: str = "info"
    kind: ErrorKind | None = None

    @classmethod
    def info(cls, message: str) -> Advisory:
        return cls(message=message, level="info")

    @classmethod
    def warning(cls, message: str, kind: ErrorKind | None = None) -> Advisory:
        return cls(message=message, level="warning", kind=kind)

    @classmethod
    def error(cls, message: str, kind: ErrorKind | None = None) -> Advisory:
        return cls(message=message, level="error", kind=kind)

    @classmethod
    def from_exception(cls, exc: BaseException, context: str = "") -> Advisory:
        """Build an error advisory whose kind is derived from ``exc``."""
        reason = describe_error(exc)
        message = f"{context}: {reason}" if context else reason
        kind = error_kind_for(exc)
        level = "warning" if kind in {ErrorKind.INVALID_INPUT, ErrorKind.STORE_CORRUPT} else "error"
        return cls(message=message, level=level, kind=kind)


__all__ = [
    "Advisory",
    "ErrorKind",
    "FsnavError",
    "InvalidInputError",
    "StoreCorruptError",
    "StoreFullError",
    "describe_error",
    "error_kind_for",
]
