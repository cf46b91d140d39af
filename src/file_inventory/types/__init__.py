"""Type definitions for file-inventory application.

This package provides the immutable data models shared by the scanner,
the classifier and the listing renderer.
"""

from file_inventory.types.models import (
    DIRECTORY_CONTENT_TYPE,
    Category,
    Classification,
    Entry,
    ScanPlan,
)

__all__ = [
    "DIRECTORY_CONTENT_TYPE",
    "Category",
    "Classification",
    "Entry",
    "ScanPlan",
]
