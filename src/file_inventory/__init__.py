"""File Inventory - list a directory tree with content types and aggregated sizes.

This package scans a directory down to a depth limit, classifies every
listed file by content type and reports each folder at the limit with the
aggregated size of everything inside it that is not listed on its own.
"""

from file_inventory.core.data.filesystem.scanner import TreeScanner
from file_inventory.types.models import Category, Entry

__all__ = ["Category", "Entry", "TreeScanner"]
