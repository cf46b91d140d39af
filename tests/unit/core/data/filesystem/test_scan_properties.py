"""Property-based tests for scan results.

Random trees are compared against a straightforward ownership oracle: every
kept file within the depth limit is reported on its own, every other kept
file is counted by its ancestor folder at the depth limit, and nothing is
counted twice.
"""

from __future__ import annotations

import tempfile
from pathlib import Path, PurePosixPath

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from file_inventory.core.data.filesystem.exclusions import DEFAULT_EXCLUSION_RULES
from file_inventory.core.data.filesystem.scanner import TreeScanner

DIRECTORY_NAMES = ("a", "b", "docs", ".git", ".hidden", "node")
FILE_NAMES = ("f1.txt", "f2.py", "Thumbs.db", "notes.tmp", ".secret", ".gitignore", "img.PNG")

directory_paths = st.lists(st.sampled_from(DIRECTORY_NAMES), min_size=0, max_size=4).map(tuple)
file_specs = st.tuples(directory_paths, st.sampled_from(FILE_NAMES), st.integers(min_value=0, max_value=64))
tree_specs = st.lists(file_specs, max_size=25)
extra_directories = st.lists(directory_paths.filter(bool), max_size=6)


type FileSpec = tuple[tuple[str, ...], str, int]


def _write(root: Path, files: list[FileSpec], directories: list[tuple[str, ...]]) -> dict[PurePosixPath, int]:
    layout: dict[PurePosixPath, int] = {}
    for parts in directories:
        root.joinpath(*parts).mkdir(parents=True, exist_ok=True)
    for parts, name, size in files:
        relative = PurePosixPath(*parts, name)
        target = root.joinpath(*relative.parts)
        target.parent.mkdir(parents=True, exist_ok=True)
        _ = target.write_bytes(b"x" * size)
        layout[relative] = size
    return layout


def _visible(relative: PurePosixPath) -> bool:
    return not any(DEFAULT_EXCLUSION_RULES.is_excluded(part) for part in relative.parts)


def _expected(
    layout: dict[PurePosixPath, int],
    directories: set[PurePosixPath],
    max_depth: int,
) -> tuple[dict[PurePosixPath, int], dict[PurePosixPath, int]]:
    files: dict[PurePosixPath, int] = {}
    folders: dict[PurePosixPath, int] = {
        folder: 0 for folder in directories if _visible(folder) and len(folder.parts) <= max_depth
    }
    for relative, size in layout.items():
        if not _visible(relative):
            continue
        if len(relative.parts) <= max_depth:
            files[relative] = size
        else:
            owner = PurePosixPath(*relative.parts[:max_depth])
            folders[owner] += size
    return files, folders


@pytest.mark.unit
@settings(deadline=None, max_examples=50)
@given(files=tree_specs, directories=extra_directories, max_depth=st.integers(min_value=1, max_value=4))
def test_scan_matches_ownership_oracle(
    files: list[FileSpec],
    directories: list[tuple[str, ...]],
    max_depth: int,
) -> None:
    """Each kept byte is reported by exactly one entry."""
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        layout = _write(root, files, directories)
        all_directories = {PurePosixPath(*parts[:i]) for parts in directories for i in range(1, len(parts) + 1)}
        all_directories |= {relative.parents[i] for relative in layout for i in range(len(relative.parts) - 1)}

        entries = TreeScanner().scan(root, max_depth)

        actual_files = {
            PurePosixPath(entry.path.relative_to(root)): entry.size_bytes for entry in entries if not entry.is_directory
        }
        actual_folders = {
            PurePosixPath(entry.path.relative_to(root)): entry.size_bytes for entry in entries if entry.is_directory
        }
        expected_files, expected_folders = _expected(layout, all_directories, max_depth)

        assert actual_files == expected_files
        assert actual_folders == expected_folders
        assert sum(entry.size_bytes for entry in entries) == sum(expected_files.values()) + sum(
            expected_folders.values()
        )
