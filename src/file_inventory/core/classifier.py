"""Content type and category classification for file names.

Maps a file name to ``(extension, content_type, category)``. The host
content-type probe (:mod:`mimetypes`) is consulted first; when it has no
answer the static extension table is used, and unknown names end up as
``application/octet-stream``.

All functions are pure apart from the host probe, whose answers depend on
the platform's MIME databases.
"""

from __future__ import annotations

import mimetypes
from collections.abc import Callable, Mapping
from typing import Final

from file_inventory.types.models import Category, Classification

type ContentTypeProbe = Callable[[str], str | None]

UNKNOWN_CONTENT_TYPE: Final[str] = "application/octet-stream"

# Fallback mapping used when the host probe has no answer
EXTENSION_CONTENT_TYPES: Final[Mapping[str, str]] = {
    # Documents
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "odt": "application/vnd.oasis.opendocument.text",
    "ods": "application/vnd.oasis.opendocument.spreadsheet",
    "odp": "application/vnd.oasis.opendocument.presentation",
    "txt": "text/plain",
    "md": "text/markdown",
    "csv": "text/csv",
    "html": "text/html",
    "htm": "text/html",
    "css": "text/css",
    "xml": "application/xml",
    "json": "application/json",
    # Images
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "svg": "image/svg+xml",
    "ico": "image/x-icon",
    "webp": "image/webp",
    # Video
    "mp4": "video/mp4",
    "avi": "video/x-msvideo",
    "mov": "video/quicktime",
    "wmv": "video/x-ms-wmv",
    "flv": "video/x-flv",
    "mkv": "video/x-matroska",
    # Audio
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "flac": "audio/flac",
    "aac": "audio/aac",
    # Archives
    "zip": "application/zip",
    "rar": "application/x-rar-compressed",
    "7z": "application/x-7z-compressed",
    "tar": "application/x-tar",
    "gz": "application/gzip",
    # Source code
    "java": "text/x-java-source",
    "py": "text/x-python",
    "js": "text/javascript",
    "ts": "text/x-typescript",
    "cpp": "text/x-c++src",
    "c": "text/x-csrc",
    "h": "text/x-chdr",
    "cs": "text/x-csharp",
    "php": "text/x-php",
    "rb": "text/x-ruby",
    "go": "text/x-go",
    "rs": "text/x-rust",
    "swift": "text/x-swift",
}

# Exact content types whose prefix does not tell the category
CONTENT_TYPE_CATEGORIES: Final[Mapping[str, Category]] = {
    "application/pdf": Category.DOCUMENT,
    "application/msword": Category.DOCUMENT,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": Category.DOCUMENT,
    "application/vnd.ms-excel": Category.DOCUMENT,
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": Category.DOCUMENT,
    "application/vnd.ms-powerpoint": Category.DOCUMENT,
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": Category.DOCUMENT,
    "application/vnd.oasis.opendocument.text": Category.DOCUMENT,
    "application/vnd.oasis.opendocument.spreadsheet": Category.DOCUMENT,
    "application/vnd.oasis.opendocument.presentation": Category.DOCUMENT,
}

# Substrings of a text/* type that name a programming language
CODE_MARKERS: Final[tuple[str, ...]] = (
    "java",
    "python",
    "typescript",
    "c++",
    "csrc",
    "chdr",
    "csharp",
    "php",
    "ruby",
    "go",
    "rust",
    "swift",
)

ARCHIVE_MARKERS: Final[tuple[str, ...]] = ("zip", "rar", "7z", "tar", "gzip")


def probe_content_type(name: str) -> str | None:
    """Ask the host MIME database for the content type of ``name``.

    Returns ``None`` when the host has no answer or the lookup fails.
    """
    try:
        # guess_type parses bare names as URLs; "data:,x.png" would be a data URL
        content_type, _encoding = mimetypes.guess_type(f"./{name}", strict=False)
    except (OSError, ValueError):
        return None
    return content_type or None


def extract_extension(name: str) -> str:
    """Return the lowercase suffix after the last dot of ``name``.

    Empty when there is no dot, when the only dot leads the name
    (``.bashrc``) or when the name ends with a dot.

    Examples:
        >>> extract_extension("Report.PDF")
        'pdf'
        >>> extract_extension("archive.tar.gz")
        'gz'
        >>> extract_extension(".gitignore")
        ''
    """
    last_dot = name.rfind(".")
    if 0 < last_dot < len(name) - 1:
        return name[last_dot + 1 :].lower()
    return ""


def resolve_content_type(name: str, probe: ContentTypeProbe | None = probe_content_type) -> str:
    """Resolve the content type of ``name``: host probe, static table, then unknown."""
    if probe is not None:
        probed = probe(name)
        if probed:
            return probed

    extension = extract_extension(name)
    if extension:
        return EXTENSION_CONTENT_TYPES.get(extension, UNKNOWN_CONTENT_TYPE)
    return UNKNOWN_CONTENT_TYPE


def categorize(content_type: str) -> Category:
    """Map a content type to its coarse category.

    Args:
        content_type: MIME-like content type string

    Returns:
        Category bucket; ``Category.OTHER`` when nothing matches
    """
    if not content_type:
        return Category.OTHER

    category = CONTENT_TYPE_CATEGORIES.get(content_type)
    if category is not None:
        return category

    if content_type.startswith("text/"):
        if any(marker in content_type for marker in CODE_MARKERS):
            return Category.CODE
        return Category.DOCUMENT
    if content_type.startswith("image/"):
        return Category.IMAGE
    if content_type.startswith("video/"):
        return Category.VIDEO
    if content_type.startswith("audio/"):
        return Category.AUDIO
    if any(marker in content_type for marker in ARCHIVE_MARKERS):
        return Category.ARCHIVE

    return Category.OTHER


def classify(name: str, probe: ContentTypeProbe | None = probe_content_type) -> Classification:
    """Classify a file name.

    Args:
        name: Final path component of the file
        probe: Host content-type probe, ``None`` to use the static table only

    Returns:
        ``Classification(extension, content_type, category)``
    """
    content_type = resolve_content_type(name, probe)
    return Classification(
        extension=extract_extension(name),
        content_type=content_type,
        category=categorize(content_type),
    )
