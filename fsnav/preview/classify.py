"""Content classification shared by preview and content search.

A file is text when its first 8 KiB decode as UTF-8 and contain no NUL byte.
The sample may end in the middle of a multibyte sequence; that incomplete tail
does not make the file binary. Images are recognised by extension alone.
"""

from __future__ import annotations

import codecs
from enum import Enum
from pathlib import Path

SAMPLE_BYTES = 8 * 1024
MAX_TEXT_BYTES = 10 * 1024 * 1024

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "svg", "ico", "webp"})

MIME_TYPES = {
    "txt": "text/plain",
    "md": "text/plain",
    "markdown": "text/plain",
    "rs": "text/x-rust",
    "py": "text/x-python",
    "js": "text/javascript",
    "mjs": "text/javascript",
    "ts": "text/typescript",
    "java": "text/x-java",
    "c": "text/x-c",
    "cpp": "text/x-c++",
    "cc": "text/x-c++",
    "cxx": "text/x-c++",
    "h": "text/x-c-header",
    "hpp": "text/x-c-header",
    "go": "text/x-go",
    "rb": "text/x-ruby",
    "php": "text/x-php",
    "sh": "text/x-shellscript",
    "bash": "text/x-shellscript",
    "html": "text/html",
    "htm": "text/html",
    "css": "text/css",
    "xml": "text/xml",
    "json": "application/json",
    "yaml": "text/x-yaml",
    "yml": "text/x-yaml",
    "toml": "text/x-toml",
    "ini": "text/x-ini",
    "cfg": "text/x-ini",
    "conf": "text/x-ini",
    "log": "text/x-log",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "svg": "image/svg+xml",
    "ico": "image/x-icon",
    "webp": "image/webp",
    "zip": "application/zip",
    "tar": "application/x-tar",
    "gz": "application/gzip",
    "gzip": "application/gzip",
    "bz2": "application/x-bzip2",
    "xz": "application/x-xz",
    "7z": "application/x-7z-compressed",
    "rar": "application/x-rar",
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/msword",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.ms-excel",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.ms-powerpoint",
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "mp4": "video/mp4",
    "avi": "video/x-msvideo",
    "mkv": "video/x-matroska",
}
DEFAULT_MIME_TYPE = "application/octet-stream"


class ContentKind(Enum):
    TEXT = "text"
    BINARY = "binary"
    IMAGE = "image"


def extension_of(path: Path) -> str:
    return path.suffix[1:].lower()


def mime_type_for(path: Path) -> str:
    return MIME_TYPES.get(extension_of(path), DEFAULT_MIME_TYPE)


def is_image_path(path: Path) -> bool:
    return extension_of(path) in IMAGE_EXTENSIONS


def is_text_sample(sample: bytes) -> bool:
    """Return whether ``sample`` looks like the start of a UTF-8 text file."""
    if b"\x00" in sample:
        return False
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(sample, final=False)
    except UnicodeDecodeError:
        return False
    return True


def read_sample(path: Path, limit: int = SAMPLE_BYTES) -> bytes:
    with path.open("rb") as handle:
        return handle.read(limit)


def classify(path: Path) -> ContentKind:
    """Classify a regular file; raises ``OSError`` when it cannot be read."""
    if is_image_path(path):
        return ContentKind.IMAGE
    return ContentKind.TEXT if is_text_sample(read_sample(path)) else ContentKind.BINARY


__all__ = [
    "ContentKind",
    "DEFAULT_MIME_TYPE",
    "IMAGE_EXTENSIONS",
    "MAX_TEXT_BYTES",
    "MIME_TYPES",
    "SAMPLE_BYTES",
    "classify",
    "extension_of",
    "is_image_path",
    "is_text_sample",
    "mime_type_for",
    "read_sample",
]
