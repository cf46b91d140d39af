"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path

import pytest

# Relative path -> file size in bytes, or None for an empty directory
type TreeLayout = Mapping[str, int | None]


def write_tree(root: Path, layout: TreeLayout) -> Path:
    """Create files and directories below ``root`` from a layout mapping."""
    for relative, size in layout.items():
        path = root / relative
        if size is None:
            path.mkdir(parents=True, exist_ok=True)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            _ = path.write_bytes(b"x" * size)
    return root


@pytest.fixture
def build_tree(tmp_path: Path) -> Callable[[TreeLayout], Path]:
    """Return a builder that lays out a fixture tree inside ``tmp_path``."""

    def _build(layout: TreeLayout) -> Path:
        root = tmp_path / "root"
        root.mkdir(exist_ok=True)
        return write_tree(root, layout)

    return _build


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
