"""Data models for file-inventory application.

This module defines immutable dataclasses used throughout the application
for type-safe data transfer between the scanner, the classifier and the
listing renderer.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import NamedTuple

# Content type reported for folder entries
DIRECTORY_CONTENT_TYPE = "inode/directory"


class Category(str, Enum):
    """Coarse content bucket derived from a content type."""

    DOCUMENT = "Document"
    IMAGE = "Image"
    VIDEO = "Video"
    AUDIO = "Audio"
    ARCHIVE = "Archive"
    CODE = "Code"
    DIRECTORY = "Directory"
    OTHER = "Other"


class Classification(NamedTuple):
    """Classifier result for a single file name."""

    extension: str
    content_type: str
    category: Category


@dataclass(frozen=True, slots=True)
class Entry:
    """One reported row of a scan result.

    Files carry their own on-disk size. Folders carry the aggregated size of
    everything inside them that is not reported by another entry.
    """

    path: Path  # absolute, normalized
    name: str
    extension: str
    content_type: str
    category: Category
    size_bytes: int
    is_directory: bool

    @classmethod
    def for_file(cls, path: Path, classification: Classification, size_bytes: int) -> "Entry":
        """Build a file entry from a classifier result."""
        return cls(
            path=path,
            name=path.name,
            extension=classification.extension,
            content_type=classification.content_type,
            category=classification.category,
            size_bytes=size_bytes,
            is_directory=False,
        )

    @classmethod
    def for_folder(cls, path: Path, size_bytes: int) -> "Entry":
        """Build an aggregated folder entry."""
        return cls(
            path=path,
            name=path.name,
            extension="",
            content_type=DIRECTORY_CONTENT_TYPE,
            category=Category.DIRECTORY,
            size_bytes=size_bytes,
            is_directory=True,
        )


@dataclass(frozen=True, slots=True)
class ScanPlan:
    """Result of the listing phase of a scan.

    ``listed_folders`` and ``scanned_files`` are the only inputs the folder
    aggregation phase needs besides the exclusion rules.
    """

    file_entries: tuple[Entry, ...]
    listed_folders: frozenset[Path]
    scanned_files: frozenset[Path]
