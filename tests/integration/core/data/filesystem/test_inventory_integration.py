"""Integration tests for complete inventory workflows."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from file_inventory.app.listing import render_listing, total_size
from file_inventory.core.config import MainConfig
from file_inventory.core.data.filesystem.scanner import TreeScanner
from file_inventory.types.models import Category


@pytest.mark.integration
class TestInventoryIntegration:
    """Integration tests for scan, classification and rendering together."""

    def test_project_tree_workflow(self) -> None:
        """Test a realistic project tree at several depths."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            visible_bytes = self._create_project_tree(temp_path)

            for depth in (1, 2, 3, 8):
                entries = TreeScanner(max_workers=4).scan(temp_path, depth)

                # Every visible byte is reported exactly once, whatever the depth
                assert total_size(entries) == visible_bytes

            entries_by_name = {entry.name: entry for entry in TreeScanner().scan(temp_path, 2)}
            assert entries_by_name["README.md"].category == Category.DOCUMENT
            assert entries_by_name["logo.png"].category == Category.IMAGE
            assert entries_by_name["main.py"].category == Category.CODE
            assert entries_by_name["release.zip"].category == Category.ARCHIVE

    def test_configured_exclusions_workflow(self) -> None:
        """Test that configured exclusions hide whole subtrees."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            visible_bytes = self._create_project_tree(temp_path)
            config = MainConfig.model_validate({"exclusions": {"names": ["assets"], "extensions": ["zip"]}})

            entries = TreeScanner(config.exclusion_rules()).scan(temp_path, 1)

            names = {entry.name for entry in entries}
            assert "assets" not in names
            assert "release.zip" not in names
            assert total_size(entries) == visible_bytes - 300 - 400 - 700

    def test_rendered_listing_is_sorted(self) -> None:
        """Test that the rendered listing follows the entry order."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            _ = self._create_project_tree(temp_path)

            listing = render_listing(TreeScanner().scan(temp_path, 1), 0.1)

            names = [line.split(" | ")[0] for line in listing.splitlines() if " | " in line]
            assert names == ["assets/", "README.md", "release.zip", "src/"]

    @staticmethod
    def _create_project_tree(base_path: Path) -> int:
        """Create a project-like tree and return the size of all visible files."""
        layout = {
            "README.md": 100,
            "release.zip": 700,
            "src/main.py": 200,
            "src/pkg/util.py": 50,
            "src/pkg/deep/more/leaf.c": 25,
            "assets/logo.png": 300,
            "assets/icons/app.ico": 400,
            # excluded, never counted
            ".git/HEAD": 1000,
            "src/.DS_Store": 1000,
            "src/pkg/build.log": 1000,
            "assets/._logo.png": 1000,
        }
        for relative, size in layout.items():
            path = base_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            _ = path.write_bytes(b"x" * size)
        return 100 + 700 + 200 + 50 + 25 + 300 + 400

