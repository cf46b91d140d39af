"""Depth-bounded tree scanner with folder size aggregation.

A scan runs in two phases:

1. Listing: every file and directory at depth ``1..max_depth`` below the
   root is visited. Kept files become file entries, kept directories become
   listed folders. Excluded directories are never entered.
2. Aggregation: each listed folder is sized from its whole subtree
   (unbounded depth), skipping files that already have their own entry and
   subtrees that belong to another listed folder.

Every kept file within the depth limit is therefore counted exactly once,
either as its own entry or inside exactly one folder aggregate.
"""

from __future__ import annotations

import contextvars
import logging
import os
import time
import uuid
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path

from file_inventory.core.classifier import ContentTypeProbe, classify, probe_content_type
from file_inventory.core.exceptions import InvalidScanArgumentError
from file_inventory.types.models import Entry, ScanPlan
from file_inventory.utils.logging import scan_id_context

from .exclusions import DEFAULT_EXCLUSION_RULES, ExclusionRules

logger = logging.getLogger(__name__)


class EntryKind(str, Enum):
    """Kinds of directory children the scanner accounts for."""

    FILE = "file"
    DIRECTORY = "directory"


def _list_directory(directory: Path) -> list[os.DirEntry[str]]:
    """List the children of ``directory``, or nothing if it cannot be read."""
    try:
        with os.scandir(directory) as it:
            return list(it)
    except OSError as exc:
        logger.warning(
            "Skipping unreadable directory %s: %s",
            directory,
            exc,
            extra={"path": str(directory), "error": str(exc)},
        )
        return []


def _entry_kind(entry: os.DirEntry[str], follow_symlinks: bool) -> EntryKind | None:
    """Return the kind of ``entry``; ``None`` for links, devices, sockets and failures."""
    try:
        if entry.is_dir(follow_symlinks=follow_symlinks):
            return EntryKind.DIRECTORY
        if entry.is_file(follow_symlinks=follow_symlinks):
            return EntryKind.FILE
    except OSError as exc:
        logger.warning(
            "Skipping unreadable entry %s: %s",
            entry.path,
            exc,
            extra={"path": entry.path, "error": str(exc)},
        )
    return None


def _file_size(entry: os.DirEntry[str], follow_symlinks: bool) -> int | None:
    """Return the byte length of a file entry, or ``None`` if it cannot be stat'd."""
    try:
        return entry.stat(follow_symlinks=follow_symlinks).st_size
    except OSError as exc:
        logger.warning(
            "Cannot read size of %s: %s",
            entry.path,
            exc,
            extra={"path": entry.path, "error": str(exc)},
        )
        return None


def aggregate_folder_size(
    folder: Path,
    listed_folders: frozenset[Path],
    scanned_files: frozenset[Path],
    rules: ExclusionRules = DEFAULT_EXCLUSION_RULES,
    *,
    follow_symlinks: bool = False,
) -> int:
    """Compute the aggregated size of one listed folder.

    Sums every kept regular file in the folder's entire subtree, except
    files that are in ``scanned_files`` and files below another listed
    folder. Excluded directories are not entered.

    Args:
        folder: Absolute, normalized folder path
        listed_folders: All folders that get their own entry in this scan
        scanned_files: All files that get their own entry in this scan
        rules: Exclusion rules of this scan
        follow_symlinks: Whether symbolic links are followed

    Returns:
        Aggregated size in bytes; unreadable files count as 0
    """
    total = 0
    pending: list[Path] = [folder]

    while pending:
        directory = pending.pop()
        for child in _list_directory(directory):
            if rules.is_excluded(child.name):
                continue

            path = Path(child.path)
            kind = _entry_kind(child, follow_symlinks)

            if kind is EntryKind.DIRECTORY:
                # A listed descendant reports its own aggregate
                if path not in listed_folders:
                    pending.append(path)
            elif kind is EntryKind.FILE and path not in scanned_files:
                total += _file_size(child, follow_symlinks) or 0

    return total


def validate_scan_arguments(root: str | os.PathLike[str], max_depth: int) -> Path:
    """Check scan preconditions and return the absolute, normalized root.

    Raises:
        InvalidScanArgumentError: If the depth is not an integer >= 1, or the
            root is missing or not a directory
    """
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        msg = f"max_depth must be an integer, got {type(max_depth).__name__}"
        raise InvalidScanArgumentError(msg)
    if max_depth < 1:
        msg = f"max_depth must be at least 1, got {max_depth}"
        raise InvalidScanArgumentError(msg)

    root_path = Path(os.path.abspath(root))
    if not root_path.exists():
        msg = f"Scan root does not exist: {root_path}"
        raise InvalidScanArgumentError(msg)
    if not root_path.is_dir():
        msg = f"Scan root is not a directory: {root_path}"
        raise InvalidScanArgumentError(msg)

    return root_path


def _sort_key(entry: Entry) -> tuple[str, str]:
    return entry.name.casefold(), str(entry.path)


class TreeScanner:
    """Scanner producing a flat, name-ordered inventory of a directory tree.

    Provides depth-bounded listing with:
    - Exclusion rules shared across scans (immutable)
    - Aggregated folder entries without double counting
    - Optional parallel folder aggregation
    - Warnings instead of failures for unreadable entries
    """

    def __init__(
        self,
        rules: ExclusionRules = DEFAULT_EXCLUSION_RULES,
        *,
        follow_symlinks: bool = False,
        max_workers: int = 1,
        probe: ContentTypeProbe | None = probe_content_type,
    ) -> None:
        """Initialize the tree scanner.

        Args:
            rules: Exclusion rules applied to every file and directory name
            follow_symlinks: Whether symbolic links are followed (no loop detection)
            max_workers: Worker threads for folder aggregation (1 runs sequentially)
            probe: Host content-type probe passed to the classifier
        """
        if max_workers < 1:
            msg = f"max_workers must be at least 1, got {max_workers}"
            raise ValueError(msg)

        self.rules: ExclusionRules = rules
        self.follow_symlinks: bool = follow_symlinks
        self.max_workers: int = max_workers
        self.probe: ContentTypeProbe | None = probe

    def scan(self, root: str | os.PathLike[str], max_depth: int) -> list[Entry]:
        """Scan ``root`` down to ``max_depth`` and return its entries ordered by name.

        Args:
            root: Directory to inventory; never itself an entry
            max_depth: Depth limit, root children are at depth 1

        Returns:
            File entries within the depth limit and one aggregated entry per
            listed folder

        Raises:
            InvalidScanArgumentError: If the root or the depth is unusable
        """
        root_path = validate_scan_arguments(root, max_depth)

        with scan_id_context(uuid.uuid4().hex):
            started = time.perf_counter()
            logger.info(
                "Scan started for %s (max depth %d)",
                root_path,
                max_depth,
                extra={"root": str(root_path), "max_depth": max_depth},
            )

            plan = self.plan(root_path, max_depth)
            folder_entries = self.aggregate(plan)
            entries = sorted([*plan.file_entries, *folder_entries], key=_sort_key)

            logger.info(
                "Scan finished: %d files, %d folders",
                len(plan.file_entries),
                len(folder_entries),
                extra={
                    "root": str(root_path),
                    "files": len(plan.file_entries),
                    "folders": len(folder_entries),
                    "elapsed_sec": round(time.perf_counter() - started, 3),
                },
            )

        return entries

    def plan(self, root: str | os.PathLike[str], max_depth: int) -> ScanPlan:
        """Run the listing phase.

        Args:
            root: Directory to inventory
            max_depth: Depth limit

        Returns:
            File entries and the listed-folder and scanned-file sets

        Raises:
            InvalidScanArgumentError: If the root or the depth is unusable
        """
        root_path = validate_scan_arguments(root, max_depth)

        file_entries: list[Entry] = []
        listed_folders: set[Path] = set()
        scanned_files: set[Path] = set()

        # (directory, depth of the directory)
        pending: list[tuple[Path, int]] = [(root_path, 0)]

        while pending:
            directory, depth = pending.pop()
            for child in _list_directory(directory):
                if self.rules.is_excluded(child.name):
                    logger.debug("Excluded %s", child.path, extra={"path": child.path})
                    continue

                path = Path(child.path)
                kind = _entry_kind(child, self.follow_symlinks)

                if kind is EntryKind.DIRECTORY:
                    listed_folders.add(path)
                    if depth + 1 < max_depth:
                        pending.append((path, depth + 1))
                elif kind is EntryKind.FILE:
                    size = _file_size(child, self.follow_symlinks)
                    if size is None:
                        continue
                    classification = classify(child.name, self.probe)
                    file_entries.append(Entry.for_file(path, classification, size))
                    scanned_files.add(path)

        return ScanPlan(
            file_entries=tuple(file_entries),
            listed_folders=frozenset(listed_folders),
            scanned_files=frozenset(scanned_files),
        )

    def aggregate(self, plan: ScanPlan) -> list[Entry]:
        """Run the aggregation phase, one folder entry per listed folder.

        Args:
            plan: Result of :meth:`plan`

        Returns:
            Folder entries in path order
        """
        folders = sorted(plan.listed_folders)

        if self.max_workers > 1 and len(folders) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [
                    executor.submit(contextvars.copy_context().run, self._folder_size, folder, plan)
                    for folder in folders
                ]
                sizes: Iterable[int] = [future.result() for future in futures]
        else:
            sizes = [self._folder_size(folder, plan) for folder in folders]

        return [Entry.for_folder(folder, size) for folder, size in zip(folders, sizes, strict=True)]

    def _folder_size(self, folder: Path, plan: ScanPlan) -> int:
        size = aggregate_folder_size(
            folder,
            plan.listed_folders,
            plan.scanned_files,
            self.rules,
            follow_symlinks=self.follow_symlinks,
        )
        logger.debug(
            "Aggregated %s: %d bytes",
            folder,
            size,
            extra={"path": str(folder), "size_bytes": size},
        )
        return size
